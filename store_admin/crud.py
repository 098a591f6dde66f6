"""Store-scoped persistence for the admin handlers.

Each helper takes the request's session and the route's store id, so every
read and write stays inside the tenant boundary. Writes of an entity plus its
nested children (product images, category fields) go out in one commit.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from .errors import InternalError, NotFound, ReferentialConflict, Unauthorized
from .models import Billboard, Category, Image, Product, Store
from .normalize import clean_label, clean_text
from .schemas import BillboardIn, CategoryIn, ProductIn, StoreIn


def _commit(db: Session, tag: str, conflict: Optional[str] = None) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if conflict is None:
            logging.exception(f"[{tag}] commit failed: {e}")
            raise InternalError() from e
        # a dependent row appeared after the pre-delete check
        logging.warning(f"[{tag}] blocked by dependent rows: {e.orig}")
        raise ReferentialConflict(conflict) from e
    except SQLAlchemyError as e:
        db.rollback()
        logging.exception(f"[{tag}] commit failed: {e}")
        raise InternalError() from e


def _count(db: Session, model, *where) -> int:
    return db.execute(select(func.count()).select_from(model).where(*where)).scalar_one()


# ---------------------------------------------------------
# Stores
# ---------------------------------------------------------
def get_owned_store(db: Session, store_id: str, user_id: str) -> Store:
    """The store behind the route, provided the caller owns it."""
    if not store_id:
        raise NotFound("Missing storeId")
    store = db.execute(
        select(Store).where(Store.id == store_id, Store.user_id == user_id)
    ).scalar_one_or_none()
    if store is None:
        logging.warning(f"Store {store_id} not owned by user {user_id}")
        raise Unauthorized()
    return store


def list_stores(db: Session, user_id: str) -> List[Store]:
    return list(db.execute(
        select(Store).where(Store.user_id == user_id).order_by(Store.created_at.desc())
    ).scalars())


def create_store(db: Session, user_id: str, data: StoreIn) -> Store:
    store = Store(name=clean_label(data.name), user_id=user_id)
    db.add(store)
    _commit(db, "STORES_POST")
    return store


def update_store(db: Session, store: Store, data: StoreIn) -> Store:
    store.name = clean_label(data.name)
    _commit(db, "STORE_PATCH")
    return store


def delete_store(db: Session, store: Store) -> Store:
    for model, relation in ((Product, "products"), (Category, "categories"), (Billboard, "billboards")):
        if _count(db, model, model.store_id == store.id):
            raise ReferentialConflict(f"Make sure you removed all {relation} from this store first.")
    db.delete(store)
    _commit(db, "STORE_DELETE", conflict="Make sure you removed all billboards, categories and products from this store first.")
    return store


# ---------------------------------------------------------
# Billboards
# ---------------------------------------------------------
def list_billboards(db: Session, store_id: str, is_active: Optional[bool] = None) -> List[Billboard]:
    q = select(Billboard).where(Billboard.store_id == store_id)
    if is_active is not None:
        q = q.where(Billboard.is_billboard_active == is_active)
    return list(db.execute(q.order_by(Billboard.created_at.desc())).scalars())


def get_billboard(db: Session, store_id: str, billboard_id: str) -> Billboard:
    bb = db.execute(
        select(Billboard).where(Billboard.id == billboard_id, Billboard.store_id == store_id)
    ).scalar_one_or_none()
    if bb is None:
        raise NotFound("Billboard not found")
    return bb


def _apply_billboard(bb: Billboard, data: BillboardIn) -> None:
    bb.label = clean_label(data.label)
    bb.label_en = clean_label(data.label_en)
    bb.image_url = data.image_url
    bb.is_billboard_active = data.is_billboard_active


def create_billboard(db: Session, store_id: str, data: BillboardIn) -> Billboard:
    bb = Billboard(store_id=store_id)
    _apply_billboard(bb, data)
    db.add(bb)
    _commit(db, "BILLBOARDS_POST")
    return bb


def update_billboard(db: Session, store_id: str, billboard_id: str, data: BillboardIn) -> Billboard:
    bb = get_billboard(db, store_id, billboard_id)
    _apply_billboard(bb, data)
    _commit(db, "BILLBOARD_PATCH")
    return bb


def delete_billboard(db: Session, store_id: str, billboard_id: str) -> Billboard:
    bb = get_billboard(db, store_id, billboard_id)
    conflict = "Make sure you removed all categories using this billboard first."
    if _count(db, Category, Category.billboard_id == bb.id):
        raise ReferentialConflict(conflict)
    db.delete(bb)
    _commit(db, "BILLBOARD_DELETE", conflict=conflict)
    return bb


# ---------------------------------------------------------
# Categories
# ---------------------------------------------------------
def list_categories(db: Session, store_id: str) -> List[Category]:
    return list(db.execute(
        select(Category).where(Category.store_id == store_id).order_by(Category.created_at.desc())
    ).scalars())


def get_category(db: Session, store_id: str, category_id: str) -> Category:
    cat = db.execute(
        select(Category).where(Category.id == category_id, Category.store_id == store_id)
    ).scalar_one_or_none()
    if cat is None:
        raise NotFound("Category not found")
    return cat


def _apply_category(db: Session, store_id: str, cat: Category, data: CategoryIn) -> None:
    try:
        bb = get_billboard(db, store_id, data.billboard_id)
    except NotFound:
        raise NotFound("Billboard not found in this store") from None
    cat.name = clean_label(data.name)
    cat.name_en = clean_text(data.name_en)
    cat.billboard = bb
    cat.category_description = clean_text(data.category_description)
    cat.category_description_en = clean_text(data.category_description_en)
    cat.category_type = clean_text(data.category_type)
    # replaced wholesale; a fresh list so the JSON column registers the change
    cat.fields = [f.model_dump(by_alias=True) for f in data.fields]


def create_category(db: Session, store_id: str, data: CategoryIn) -> Category:
    cat = Category(store_id=store_id)
    _apply_category(db, store_id, cat, data)
    db.add(cat)
    _commit(db, "CATEGORIES_POST")
    return cat


def update_category(db: Session, store_id: str, category_id: str, data: CategoryIn) -> Category:
    cat = get_category(db, store_id, category_id)
    _apply_category(db, store_id, cat, data)
    _commit(db, "CATEGORY_PATCH")
    return cat


def delete_category(db: Session, store_id: str, category_id: str) -> Category:
    cat = get_category(db, store_id, category_id)
    conflict = "Make sure you removed all products from this category first."
    if _count(db, Product, Product.category_id == cat.id):
        raise ReferentialConflict(conflict)
    db.delete(cat)
    _commit(db, "CATEGORY_DELETE", conflict=conflict)
    return cat


# ---------------------------------------------------------
# Products
# ---------------------------------------------------------
def _product_query(store_id: str):
    return (
        select(Product)
        .where(Product.store_id == store_id)
        .options(selectinload(Product.images), selectinload(Product.category))
    )


def list_products(
    db: Session,
    store_id: str,
    category_id: Optional[str] = None,
    is_featured: Optional[bool] = None,
) -> List[Product]:
    q = _product_query(store_id).where(Product.is_archived.is_(False))
    if category_id:
        q = q.where(Product.category_id == category_id)
    if is_featured is not None:
        q = q.where(Product.is_featured == is_featured)
    return list(db.execute(q.order_by(Product.created_at.desc())).scalars())


def get_product(db: Session, store_id: str, product_id: str) -> Product:
    prod = db.execute(_product_query(store_id).where(Product.id == product_id)).scalar_one_or_none()
    if prod is None:
        raise NotFound("Product not found")
    return prod


def _apply_product(db: Session, store_id: str, prod: Product, data: ProductIn) -> None:
    try:
        cat = get_category(db, store_id, data.category_id)
    except NotFound:
        raise NotFound("Category not found in this store") from None
    prod.name = clean_label(data.name)
    prod.price = data.price
    prod.category = cat
    prod.is_featured = data.is_featured
    prod.is_archived = data.is_archived
    prod.product_description = clean_text(data.product_description)
    prod.images = [Image(url=img.url, position=i) for i, img in enumerate(data.images)]


def create_product(db: Session, store_id: str, data: ProductIn) -> Product:
    prod = Product(store_id=store_id)
    _apply_product(db, store_id, prod, data)
    db.add(prod)
    _commit(db, "PRODUCTS_POST")
    return get_product(db, store_id, prod.id)


def update_product(db: Session, store_id: str, product_id: str, data: ProductIn) -> Product:
    prod = get_product(db, store_id, product_id)
    _apply_product(db, store_id, prod, data)
    _commit(db, "PRODUCT_PATCH")
    return get_product(db, store_id, prod.id)


def delete_product(db: Session, store_id: str, product_id: str) -> Product:
    prod = get_product(db, store_id, product_id)
    db.delete(prod)
    _commit(db, "PRODUCT_DELETE")
    return prod
