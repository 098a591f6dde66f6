# store_admin/normalize.py
import re
from typing import List, Optional, Iterable

from .schemas import ProductOut

_RE_CONTROL = re.compile(r"[\u0000-\u0008\u000B-\u001F\u007F\u200B\uFEFF]")
_RE_MULTI_SPACE = re.compile(r"[ \t\u00A0]{2,}")


def clean_text(s: Optional[str]) -> Optional[str]:
    """
    Tidy free text typed into the dashboard:
      - drop control / zero-width chars (newlines are kept)
      - collapse runs of spaces, strip the ends
    Blank input becomes None.
    """
    if s is None:
        return None
    s = _RE_CONTROL.sub("", s)
    s = _RE_MULTI_SPACE.sub(" ", s)
    s = s.strip()
    return s or None


def clean_label(s: str) -> str:
    """Single-line variant for names and labels."""
    return re.sub(r"\s+", " ", clean_text(s) or "")


def normalize_product(product) -> ProductOut:
    out = ProductOut.model_validate(product)
    # storefront expects an explicit null, never an empty string
    out.product_description = out.product_description or None
    return out


def normalize_products(products: Iterable) -> List[ProductOut]:
    return [normalize_product(p) for p in products]
