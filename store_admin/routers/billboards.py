from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from .. import crud
from ..auth import require_user_id
from ..db import get_db
from ..schemas import BillboardOut
from ..validation import validate_billboard

router = APIRouter(prefix="/{store_id}/billboards", tags=["billboards"])


@router.post("", response_model=BillboardOut, status_code=201)
def create_billboard(
    store_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_billboard(body)
    crud.get_owned_store(db, store_id, user_id)
    return BillboardOut.model_validate(crud.create_billboard(db, store_id, data))


@router.get("", response_model=List[BillboardOut])
def list_billboards(
    store_id: str,
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: Session = Depends(get_db),
):
    return [BillboardOut.model_validate(b) for b in crud.list_billboards(db, store_id, is_active)]


@router.get("/{billboard_id}", response_model=BillboardOut)
def get_billboard(store_id: str, billboard_id: str, db: Session = Depends(get_db)):
    return BillboardOut.model_validate(crud.get_billboard(db, store_id, billboard_id))


@router.patch("/{billboard_id}", response_model=BillboardOut)
def update_billboard(
    store_id: str,
    billboard_id: str,
    body: Any = Body(None),
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    data = validate_billboard(body)
    crud.get_owned_store(db, store_id, user_id)
    return BillboardOut.model_validate(crud.update_billboard(db, store_id, billboard_id, data))


@router.delete("/{billboard_id}", response_model=BillboardOut)
def delete_billboard(
    store_id: str,
    billboard_id: str,
    user_id: str = Depends(require_user_id),
    db: Session = Depends(get_db),
):
    crud.get_owned_store(db, store_id, user_id)
    return BillboardOut.model_validate(crud.delete_billboard(db, store_id, billboard_id))
