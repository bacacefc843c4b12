"""Product write workflow: a product, its sizes and its images change together.

Each mutating call runs in one unit of work. Blob writes made during the
call are removed again if the transaction rolls back, and blobs that lose
their database reference are removed once the transaction has committed.
"""
from datetime import datetime
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from arttouch_admin.errors import ConflictError, NotFoundError
from arttouch_admin.models.category import Category  # noqa: F401  (registers the mapper)
from arttouch_admin.models.product import Product, ProductImage, ProductSize
from arttouch_admin.schemas.product import ProductDraft, SizeDraft
from arttouch_admin.services.results import reported
from arttouch_admin.services.uow import UnitOfWork, unit_of_work
from arttouch_admin.services.validation import accepted_sizes, validate_product_draft
from arttouch_admin.utils.storage import ImageUpload, blob_name_for

logger = logging.getLogger(__name__)


def _product_query(db: Session):
    return db.query(Product).options(
        joinedload(Product.category),
        selectinload(Product.sizes),
        selectinload(Product.images),
    )


def _load_product(db: Session, product_id: int) -> Product:
    product = _product_query(db).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Product", product_id)
    return product


def _apply_draft(product: Product, draft: ProductDraft) -> None:
    product.name = draft.name.strip()
    product.description = draft.description
    product.original_price = draft.original_price
    product.discount_price = draft.discount_price
    product.category_id = draft.category_id
    product.is_active = draft.is_active
    product.is_new_arrival = draft.is_new_arrival
    product.is_bestseller = draft.is_bestseller


def _add_sizes(db: Session, product_id: int, drafts: Iterable[SizeDraft]) -> int:
    kept = accepted_sizes(drafts)
    for draft in kept:
        db.add(ProductSize(product_id=product_id, size=draft.size.strip(), quantity_in_stock=draft.quantity_in_stock))
    return len(kept)


def _store_image(uow: UnitOfWork, product_id: int, upload: ImageUpload, is_cover: bool) -> ProductImage:
    kind = "cover" if is_cover else "additional"
    ref = uow.store_blob(upload.content, blob_name_for(kind, product_id, upload.filename))
    return ProductImage(product_id=product_id, image_url=ref, is_cover=is_cover)


def _add_additional_images(db: Session, uow: UnitOfWork, product_id: int, uploads: Iterable[ImageUpload]) -> int:
    count = 0
    for upload in uploads or []:
        if upload is None or upload.is_empty:
            continue
        db.add(_store_image(uow, product_id, upload, is_cover=False))
        count += 1
    return count


@reported("loading products")
def list_products(db: Session):
    return _product_query(db).order_by(Product.id.asc()).all()


@reported("loading product")
def get_product(db: Session, product_id: int):
    return _load_product(db, product_id)


@reported("creating product", "Product created successfully!")
def create_product(
    db: Session,
    blobs,
    draft: ProductDraft,
    cover_image: Optional[ImageUpload] = None,
    additional_images: Iterable[ImageUpload] = (),
    sizes: Iterable[SizeDraft] = (),
):
    validate_product_draft(db, draft)
    with unit_of_work(db, blobs) as uow:
        product = Product()
        _apply_draft(product, draft)
        db.add(product)
        db.flush()  # get product.id
        product_id = product.id

        size_count = _add_sizes(db, product_id, sizes)
        if cover_image is not None and not cover_image.is_empty:
            db.add(_store_image(uow, product_id, cover_image, is_cover=True))
        image_count = _add_additional_images(db, uow, product_id, additional_images)

    logger.info("Product %s created with %d sizes and %d additional images", product_id, size_count, image_count)
    return _load_product(db, product_id)


@reported("updating product", "Product updated successfully!")
def update_product(
    db: Session,
    blobs,
    product_id: int,
    draft: ProductDraft,
    cover_image: Optional[ImageUpload] = None,
    additional_images: Iterable[ImageUpload] = (),
    sizes: Iterable[SizeDraft] = (),
    expected_version: Optional[int] = None,
):
    product = _load_product(db, product_id)
    if expected_version is not None and expected_version != product.version:
        raise ConflictError(
            f"Product {product_id} was modified by another request (version {product.version}, expected {expected_version})"
        )
    validate_product_draft(db, draft)
    sizes = list(sizes or [])

    with unit_of_work(db, blobs) as uow:
        _apply_draft(product, draft)
        # Always issue an UPDATE so the version token moves even if no scalar changed
        product.updated_at = datetime.utcnow()

        # An empty size list keeps the current sizes; a non-empty one replaces all of them
        if sizes:
            for size in list(product.sizes):
                db.delete(size)
            db.flush()
            db.expire(product, ["sizes"])
            _add_sizes(db, product_id, sizes)

        if cover_image is not None and not cover_image.is_empty:
            # Write the new file before touching the old row so a failed write leaves the old cover intact
            new_cover = _store_image(uow, product_id, cover_image, is_cover=True)
            old_covers = (
                db.query(ProductImage)
                .filter(ProductImage.product_id == product_id, ProductImage.is_cover.is_(True))
                .all()
            )
            for old in old_covers:
                uow.discard_after_commit(old.image_url)
                db.delete(old)
            db.add(new_cover)

        image_count = _add_additional_images(db, uow, product_id, additional_images)

    logger.info("Product %s updated (%d new additional images)", product_id, image_count)
    return _load_product(db, product_id)


@reported("deleting product", "Product deleted successfully!")
def delete_product(db: Session, blobs, product_id: int):
    product = _load_product(db, product_id)
    with unit_of_work(db, blobs) as uow:
        for size in list(product.sizes):
            db.delete(size)
        db.flush()
        for image in list(product.images):
            uow.discard_after_commit(image.image_url)
            db.delete(image)
        db.flush()
        db.expire(product, ["sizes", "images"])
        db.delete(product)
    logger.info("Product %s deleted", product_id)
    return product_id
