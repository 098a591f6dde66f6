from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from .. import crud
from ..auth import require_user_id
from ..db import get_db
from ..normalize import normalize_product, normalize_products
from ..schemas import ProductOut
from ..validation import validate_product

router = APIRouter(prefix="/{store_id}/products", tags=["products"])


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    store_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_product(body)
    crud.get_owned_store(db, store_id, user_id)
    return normalize_product(crud.create_product(db, store_id, data))


@router.get("", response_model=List[ProductOut])
def list_products(
    store_id: str,
    category_id: Optional[str] = Query(None, alias="categoryId"),
    is_featured: Optional[bool] = Query(None, alias="isFeatured"),
    db: Session = Depends(get_db),
):
    return normalize_products(crud.list_products(db, store_id, category_id, is_featured))


@router.get("/{product_id}", response_model=ProductOut)
def get_product(store_id: str, product_id: str, db: Session = Depends(get_db)):
    return normalize_product(crud.get_product(db, store_id, product_id))


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    store_id: str,
    product_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_product(body)
    crud.get_owned_store(db, store_id, user_id)
    return normalize_product(crud.update_product(db, store_id, product_id, data))


@router.delete("/{product_id}", response_model=ProductOut)
def delete_product(
    store_id: str,
    product_id: str,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    crud.get_owned_store(db, store_id, user_id)
    return normalize_product(crud.delete_product(db, store_id, product_id))
