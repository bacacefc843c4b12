from datetime import datetime
import logging

from sqlalchemy.orm import Session, joinedload, selectinload

from arttouch_admin.errors import NotFoundError, ValidationError
from arttouch_admin.models.category import Category  # noqa: F401  (registers the mapper)
from arttouch_admin.models.order import Order, OrderItem, OrderStatus
from arttouch_admin.models.product import Product
from arttouch_admin.models.user import User  # noqa: F401  (registers the mapper)
from arttouch_admin.services.results import reported
from arttouch_admin.services.uow import unit_of_work

logger = logging.getLogger(__name__)


def _order_query(db: Session):
    # user, items, item products and their images in one round of selects
    return db.query(Order).options(
        joinedload(Order.user),
        selectinload(Order.items).selectinload(OrderItem.product).selectinload(Product.images),
    )


@reported("loading orders")
def list_orders(db: Session):
    return _order_query(db).order_by(Order.order_date.desc(), Order.id.desc()).all()


@reported("loading order")
def get_order(db: Session, order_id: int):
    order = _order_query(db).filter(Order.id == order_id).first()
    if not order:
        raise NotFoundError("Order", order_id)
    return order


@reported("updating order status", "Order status updated")
def update_order_status(db: Session, order_id: int, status_label: str):
    order = db.get(Order, order_id)
    if not order:
        raise NotFoundError("Order", order_id)
    status = OrderStatus.parse(status_label)
    if status is None:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": f"Unknown status {status_label!r}; expected one of {allowed}"}, "Invalid status")
    # Any recognized status may follow any other
    with unit_of_work(db):
        order.status = status.value
        order.updated_at = datetime.utcnow()
    db.refresh(order)
    logger.info("Order %s status -> %s", order_id, status.value)
    return order
