from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from .. import crud
from ..auth import require_user_id
from ..db import get_db
from ..schemas import StoreOut
from ..validation import validate_store

router = APIRouter(prefix="/stores", tags=["stores"])


@router.post("", response_model=StoreOut, status_code=201)
def create_store(body: Any = Body(None), user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    data = validate_store(body)
    return StoreOut.model_validate(crud.create_store(db, user_id, data))


@router.get("", response_model=List[StoreOut])
def list_stores(user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    return [StoreOut.model_validate(s) for s in crud.list_stores(db, user_id)]


@router.get("/{store_id}", response_model=StoreOut)
def get_store(store_id: str, user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    return StoreOut.model_validate(crud.get_owned_store(db, store_id, user_id))


@router.patch("/{store_id}", response_model=StoreOut)
def update_store(
    store_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_store(body)
    store = crud.get_owned_store(db, store_id, user_id)
    return StoreOut.model_validate(crud.update_store(db, store, data))


@router.delete("/{store_id}", response_model=StoreOut)
def delete_store(store_id: str, user_id: str = Depends(require_user_id), db: Session = Depends(get_db)):
    store = crud.get_owned_store(db, store_id, user_id)
    return StoreOut.model_validate(crud.delete_store(db, store))
