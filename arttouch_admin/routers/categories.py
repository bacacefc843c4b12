from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from arttouch_admin.database import get_db
from arttouch_admin.models.category import Category
from arttouch_admin.schemas.category import (
    CategoryDraft,
    CategoryOut,
    CategoryStatusUpdate,
    CategoryUpdate,
)
from arttouch_admin.services import categories as category_service
from arttouch_admin.utils.http import unwrap
from arttouch_admin.utils.security import require_admin


router = APIRouter()


def _to_out(c: Category, with_count: bool = False) -> CategoryOut:
    return CategoryOut(
        id=c.id,
        name=c.name,
        isActive=bool(c.is_active),
        productCount=len(c.products) if with_count else 0,
    )


@router.get("/", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    categories = unwrap(category_service.list_categories(db))
    return [_to_out(c, with_count=True) for c in categories]


@router.post("/", response_model=CategoryOut)
def create_category(payload: CategoryDraft, db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    return _to_out(unwrap(category_service.create_category(db, payload)))


@router.put("/{id}", response_model=CategoryOut)
def update_category(id: int, payload: CategoryDraft, db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    draft = CategoryUpdate(id=id, name=payload.name, isActive=payload.isActive)
    return _to_out(unwrap(category_service.update_category(db, draft)))


@router.put("/{id}/status", response_model=CategoryOut)
def toggle_category_status(
    id: int,
    payload: CategoryStatusUpdate,
    db: Session = Depends(get_db),
    admin: str = Depends(require_admin),
):
    return _to_out(unwrap(category_service.toggle_category_status(db, id, payload.isActive)))


@router.delete("/{id}")
def delete_category(id: int, db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    result = category_service.delete_category(db, id)
    unwrap(result)
    return {"message": result.message, "id": id}
