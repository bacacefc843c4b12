from sqlalchemy import func
from sqlalchemy.orm import Session

from arttouch_admin.models.category import Category
from arttouch_admin.models.order import Order, OrderStatus
from arttouch_admin.models.product import Product
from arttouch_admin.models.user import User  # noqa: F401  (registers the mapper)
from arttouch_admin.services.results import reported


@reported("loading dashboard")
def get_dashboard_summary(db: Session):
    revenue = (
        db.query(func.coalesce(func.sum(Order.total_amount), 0.0))
        .filter(Order.status == OrderStatus.COMPLETED.value)
        .scalar()
    )
    return {
        "total_products": db.query(Product).count(),
        "total_orders": db.query(Order).count(),
        "total_categories": db.query(Category).count(),
        "total_revenue": float(revenue or 0.0),
    }
