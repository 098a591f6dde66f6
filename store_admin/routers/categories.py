from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from .. import crud
from ..auth import require_user_id
from ..db import get_db
from ..schemas import CategoryOut
from ..validation import validate_category

router = APIRouter(prefix="/{store_id}/categories", tags=["categories"])


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(
    store_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_category(body)
    crud.get_owned_store(db, store_id, user_id)
    return CategoryOut.model_validate(crud.create_category(db, store_id, data))


@router.get("", response_model=List[CategoryOut])
def list_categories(store_id: str, db: Session = Depends(get_db)):
    return [CategoryOut.model_validate(c) for c in crud.list_categories(db, store_id)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(store_id: str, category_id: str, db: Session = Depends(get_db)):
    return CategoryOut.model_validate(crud.get_category(db, store_id, category_id))


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    store_id: str,
    category_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_category(body)
    crud.get_owned_store(db, store_id, user_id)
    return CategoryOut.model_validate(crud.update_category(db, store_id, category_id, data))


@router.delete("/{category_id}", response_model=CategoryOut)
def delete_category(
    store_id: str,
    category_id: str,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    crud.get_owned_store(db, store_id, user_id)
    return CategoryOut.model_validate(crud.delete_category(db, store_id, category_id))
