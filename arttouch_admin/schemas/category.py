from pydantic import BaseModel
from typing import Optional


class CategoryDraft(BaseModel):
    name: str
    isActive: bool = True


class CategoryUpdate(CategoryDraft):
    id: Optional[int] = None


class CategoryStatusUpdate(BaseModel):
    isActive: bool


class CategoryOut(BaseModel):
    id: int
    name: str
    isActive: bool
    productCount: int = 0
