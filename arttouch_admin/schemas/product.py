from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class ProductDraft(BaseModel):
    """Every mutable product field. Updates replace all of them, so all are sent every time."""

    name: str
    description: Optional[str] = None
    original_price: float
    discount_price: Optional[float] = None
    category_id: int
    is_active: bool = True
    is_new_arrival: bool = False
    is_bestseller: bool = False


class SizeDraft(BaseModel):
    # Rows with an empty label or a negative quantity are skipped by the product service
    size: Optional[str] = ""
    quantity_in_stock: int = 0


class ProductSizeOut(BaseModel):
    id: int
    size: str
    quantityInStock: int


class ProductImageOut(BaseModel):
    id: int
    imageUrl: str
    isCover: bool


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    originalPrice: float
    discountPrice: Optional[float] = None
    categoryId: int
    categoryName: Optional[str] = None
    isActive: bool
    isNewArrival: bool
    isBestseller: bool
    coverImage: Optional[str] = None
    sizes: List[ProductSizeOut] = []
    images: List[ProductImageOut] = []
    version: int

    model_config = ConfigDict(from_attributes=True)
