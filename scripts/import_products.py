# scripts/import_products.py
import os, sys, json, html, logging
import pandas as pd
from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.orm import Session

# Load environment variables (optional for local dev)
load_dotenv()
os.environ.setdefault("DATABASE_URL", "sqlite:///./store_admin.db")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from store_admin.db import Base, engine
from store_admin.models import Category, Store
from store_admin import crud
from store_admin.errors import AdminError
from store_admin.validation import validate_product

Base.metadata.create_all(bind=engine)


def to_float(v):
    if v is None or (isinstance(v, float) and pd.isna(v)): return None
    s = str(v).replace("$", "").replace(",", "").strip()
    try: return float(s)
    except ValueError: return None

def to_bool(v):
    if v is None or (isinstance(v, float) and pd.isna(v)): return False
    return str(v).strip().lower() in {"1", "true", "yes", "y"}

def parse_images(v):
    """Accept list as-is; if string that looks like JSON list -> json.loads; if comma string -> split; else []"""
    if v is None or (isinstance(v, float) and pd.isna(v)): return []
    if isinstance(v, list): return [str(u).strip() for u in v if str(u).strip()]
    if isinstance(v, str):
        v = v.strip()
        if not v: return []
        if v.startswith("[") and v.endswith("]"):
            try: return [str(u).strip() for u in json.loads(v) if str(u).strip()]
            except ValueError: pass
        if "," in v:
            return [p.strip() for p in v.split(",") if p.strip()]
        return [v]  # single URL string
    return []

def cell(r, df, col):
    if col not in df.columns: return None
    v = r.get(col)
    return None if (isinstance(v, float) and pd.isna(v)) else v

def text(v):
    """Marketplace exports often carry HTML entities; decode them on import only."""
    return None if v is None else html.unescape(str(v)).strip()

def build_payload(r, df, categories_by_name):
    """Row -> product payload in the same shape the API accepts."""
    name = cell(r, df, "category")
    cat = categories_by_name.get(str(name).strip().lower()) if name is not None else None
    return {
        "name": text(cell(r, df, "name")) or "",
        "price": to_float(cell(r, df, "price")),
        "categoryId": cat.id if cat else None,
        "images": [{"url": u} for u in parse_images(cell(r, df, "images"))],
        "isFeatured": to_bool(cell(r, df, "featured")),
        "isArchived": False,
        "productDescription": text(cell(r, df, "description")),
    }

def main(store_id: str, csv_path: str):
    df = pd.read_csv(csv_path)
    imported = skipped = 0
    with Session(engine, expire_on_commit=False) as session:
        store = session.get(Store, store_id)
        if store is None:
            print(f"❌ Store {store_id} not found.")
            sys.exit(1)
        categories_by_name = {
            c.name.strip().lower(): c
            for c in session.execute(select(Category).where(Category.store_id == store_id)).scalars()
        }
        for i, r in df.iterrows():
            payload = build_payload(r, df, categories_by_name)
            try:
                crud.create_product(session, store_id, validate_product(payload))
                imported += 1
            except AdminError as e:
                skipped += 1
                logging.warning(f"Row {i} skipped: {e.message}")
    print(f"✅ Imported {imported} products into store {store_id} ({skipped} skipped).")

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/import_products.py <storeId> products.csv")
        sys.exit(1)
    main(sys.argv[1], sys.argv[2])
