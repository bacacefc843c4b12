import logging
import math
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from arttouch_admin.errors import ValidationError
from arttouch_admin.models.category import Category
from arttouch_admin.schemas.product import ProductDraft, SizeDraft

logger = logging.getLogger(__name__)


def validate_product_draft(db: Session, draft: ProductDraft) -> None:
    """Raise ValidationError listing every invalid field of ``draft``."""
    errors: Dict[str, str] = {}
    if not (draft.name or "").strip():
        errors["name"] = "Name is required"
    if draft.original_price is None or not math.isfinite(draft.original_price) or draft.original_price < 0:
        errors["original_price"] = "Original price must be a number zero or greater"
    if draft.discount_price is not None and (not math.isfinite(draft.discount_price) or draft.discount_price < 0):
        errors["discount_price"] = "Discount price must be a number zero or greater"
    if draft.category_id is None or db.get(Category, draft.category_id) is None:
        errors["category_id"] = "Category does not exist"
    if errors:
        raise ValidationError(errors)


def validate_category_name(name: str) -> None:
    if not (name or "").strip():
        raise ValidationError({"name": "Name is required"})


def accepted_sizes(drafts: Iterable[SizeDraft]) -> List[SizeDraft]:
    """Keep drafts with a label and a non-negative quantity; the rest are dropped.

    Labels are unique per product: a repeated label (after stripping) keeps
    the last row given for it.
    """
    by_label: Dict[str, SizeDraft] = {}
    for draft in drafts or []:
        label = (draft.size or "").strip()
        if not label or draft.quantity_in_stock < 0:
            logger.warning("Skipping size row size=%r quantity=%r", draft.size, draft.quantity_in_stock)
            continue
        if label in by_label:
            dropped = by_label.pop(label)
            logger.warning("Duplicate size %r: replacing quantity %r with %r", label, dropped.quantity_in_stock, draft.quantity_in_stock)
        by_label[label] = SizeDraft(size=label, quantity_in_stock=draft.quantity_in_stock)
    return list(by_label.values())
