import logging

from sqlalchemy.orm import Session, selectinload

from arttouch_admin.errors import ConflictError, NotFoundError, ValidationError
from arttouch_admin.models.category import Category
from arttouch_admin.models.product import Product
from arttouch_admin.schemas.category import CategoryDraft, CategoryUpdate
from arttouch_admin.services.results import reported
from arttouch_admin.services.uow import unit_of_work
from arttouch_admin.services.validation import validate_category_name

logger = logging.getLogger(__name__)


def _get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if not category:
        raise NotFoundError("Category", category_id)
    return category


@reported("loading categories")
def list_categories(db: Session):
    return db.query(Category).options(selectinload(Category.products)).order_by(Category.name.asc(), Category.id.asc()).all()


@reported("creating category", "Category created successfully!")
def create_category(db: Session, draft: CategoryDraft):
    validate_category_name(draft.name)
    with unit_of_work(db):
        category = Category(name=draft.name.strip(), is_active=draft.isActive)
        db.add(category)
    db.refresh(category)
    logger.info("Category %s created", category.id)
    return category


@reported("updating category", "Category updated successfully!")
def update_category(db: Session, draft: CategoryUpdate):
    if draft.id is None:
        raise ValidationError({"id": "Category id is required"})
    category = _get_category(db, draft.id)
    validate_category_name(draft.name)
    with unit_of_work(db):
        category.name = draft.name.strip()
        category.is_active = draft.isActive
    db.refresh(category)
    return category


@reported("updating category status", "Category status updated")
def toggle_category_status(db: Session, category_id: int, is_active: bool):
    category = _get_category(db, category_id)
    with unit_of_work(db):
        category.is_active = is_active
    db.refresh(category)
    logger.info("Category %s is_active=%s", category_id, is_active)
    return category


@reported("deleting category", "Category deleted successfully!")
def delete_category(db: Session, category_id: int):
    category = _get_category(db, category_id)
    has_products = db.query(Product.id).filter(Product.category_id == category_id).first() is not None
    if has_products:
        raise ConflictError("Cannot delete category that has products")
    with unit_of_work(db):
        db.delete(category)
    logger.info("Category %s deleted", category_id)
    return category_id
