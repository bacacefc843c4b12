from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Form
from sqlalchemy.orm import Session
from typing import List, Optional
import json

from arttouch_admin.database import get_db
from arttouch_admin.models.product import Product
from arttouch_admin.schemas.product import (
    ProductDraft,
    ProductImageOut,
    ProductOut,
    ProductSizeOut,
    SizeDraft,
)
from arttouch_admin.services import products as product_service
from arttouch_admin.utils.http import unwrap
from arttouch_admin.utils.security import require_admin
from arttouch_admin.utils.storage import ImageUpload, LocalBlobStore, get_blob_store

router = APIRouter()

# Helpers


def _parse_quantity(value) -> int:
    """Whole-number quantity, or -1 so the product service skips the row."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return -1
    if isinstance(value, float):
        return int(value) if value.is_integer() else -1
    try:
        return int(value)
    except (TypeError, ValueError):
        return -1


def parse_sizes(raw: Optional[str]) -> List[SizeDraft]:
    """Decode the ``sizes`` form field.

    Accepts a JSON list of ``{"size": "M", "quantity": 5}`` objects or a
    ``{"M": 5}`` map. Bad rows are kept with quantity -1; the product service
    decides which to drop.
    """
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail={"message": "Invalid sizes", "errors": {"sizes": "Not valid JSON"}})
    if isinstance(parsed, dict):
        parsed = [{"size": k, "quantity": v} for k, v in parsed.items()]
    if not isinstance(parsed, list):
        raise HTTPException(status_code=400, detail={"message": "Invalid sizes", "errors": {"sizes": "Expected a list or an object"}})
    drafts = []
    for row in parsed:
        if not isinstance(row, dict):
            drafts.append(SizeDraft(size=str(row) if isinstance(row, str) else "", quantity_in_stock=-1))
            continue
        quantity = row.get("quantity", row.get("quantityInStock", row.get("quantity_in_stock")))
        drafts.append(SizeDraft(size=str(row.get("size") or ""), quantity_in_stock=_parse_quantity(quantity)))
    return drafts


def to_image_upload(upload: Optional[UploadFile]) -> Optional[ImageUpload]:
    if upload is None or not upload.filename:
        return None
    return ImageUpload(filename=upload.filename, content=upload.file.read())


def to_product_out(p: Product) -> ProductOut:
    cover = p.cover_image
    return ProductOut(
        id=p.id,
        name=p.name,
        description=p.description,
        originalPrice=p.original_price,
        discountPrice=p.discount_price,
        categoryId=p.category_id,
        categoryName=p.category.name if p.category else None,
        isActive=bool(p.is_active),
        isNewArrival=bool(p.is_new_arrival),
        isBestseller=bool(p.is_bestseller),
        coverImage=cover.image_url if cover else None,
        sizes=[ProductSizeOut(id=s.id, size=s.size, quantityInStock=s.quantity_in_stock) for s in p.sizes],
        images=[ProductImageOut(id=i.id, imageUrl=i.image_url, isCover=bool(i.is_cover)) for i in p.images],
        version=p.version,
    )


@router.get("/", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    products = unwrap(product_service.list_products(db))
    return [to_product_out(p) for p in products]


@router.get("/{id}", response_model=ProductOut)
def get_product(id: int, db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    return to_product_out(unwrap(product_service.get_product(db, id)))


@router.post("/", response_model=ProductOut)
def create_product(
    name: str = Form(...),
    description: Optional[str] = Form(None),
    original_price: float = Form(...),
    discount_price: Optional[float] = Form(None),
    category_id: int = Form(...),
    is_active: bool = Form(True),
    is_new_arrival: bool = Form(False),
    is_bestseller: bool = Form(False),
    sizes: Optional[str] = Form(None, description="JSON list of {size, quantity} objects or a size -> quantity map"),
    coverImage: UploadFile = File(None),
    additionalImages: List[UploadFile] = File([]),
    db: Session = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
    admin: str = Depends(require_admin),
):
    draft = ProductDraft(
        name=name,
        description=description,
        original_price=original_price,
        discount_price=discount_price,
        category_id=category_id,
        is_active=is_active,
        is_new_arrival=is_new_arrival,
        is_bestseller=is_bestseller,
    )
    result = product_service.create_product(
        db,
        blobs,
        draft,
        cover_image=to_image_upload(coverImage),
        additional_images=[u for u in (to_image_upload(f) for f in additionalImages or []) if u],
        sizes=parse_sizes(sizes),
    )
    return to_product_out(unwrap(result))


@router.put("/{id}", response_model=ProductOut)
def update_product(
    id: int,
    name: str = Form(...),
    description: Optional[str] = Form(None),
    original_price: float = Form(...),
    discount_price: Optional[float] = Form(None),
    category_id: int = Form(...),
    is_active: bool = Form(True),
    is_new_arrival: bool = Form(False),
    is_bestseller: bool = Form(False),
    sizes: Optional[str] = Form(None, description="Replaces all sizes when non-empty; omit to keep current sizes"),
    version: Optional[int] = Form(None, description="Version the edit was based on"),
    coverImage: UploadFile = File(None),
    additionalImages: List[UploadFile] = File([]),
    db: Session = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
    admin: str = Depends(require_admin),
):
    draft = ProductDraft(
        name=name,
        description=description,
        original_price=original_price,
        discount_price=discount_price,
        category_id=category_id,
        is_active=is_active,
        is_new_arrival=is_new_arrival,
        is_bestseller=is_bestseller,
    )
    result = product_service.update_product(
        db,
        blobs,
        id,
        draft,
        cover_image=to_image_upload(coverImage),
        additional_images=[u for u in (to_image_upload(f) for f in additionalImages or []) if u],
        sizes=parse_sizes(sizes),
        expected_version=version,
    )
    return to_product_out(unwrap(result))


@router.delete("/{id}")
def delete_product(
    id: int,
    db: Session = Depends(get_db),
    blobs: LocalBlobStore = Depends(get_blob_store),
    admin: str = Depends(require_admin),
):
    result = product_service.delete_product(db, blobs, id)
    unwrap(result)
    return {"message": result.message, "id": id}
