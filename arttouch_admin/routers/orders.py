from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from arttouch_admin.database import get_db
from arttouch_admin.models.order import Order
from arttouch_admin.schemas.order import (
    OrderCustomerOut,
    OrderItemOut,
    OrderOut,
    OrderStatusUpdate,
)
from arttouch_admin.services import orders as order_service
from arttouch_admin.utils.http import unwrap
from arttouch_admin.utils.security import require_admin


router = APIRouter()


def map_order_to_out(order: Order) -> OrderOut:
    customer = None
    if order.user is not None:
        customer = OrderCustomerOut(id=order.user.id, name=order.user.full_name or None, email=order.user.email)
    items = []
    for i in order.items:
        product = i.product
        cover = product.cover_image if product is not None else None
        if cover is None and product is not None and product.images:
            cover = product.images[0]
        items.append(
            OrderItemOut(
                id=i.id,
                productId=i.product_id,
                productName=product.name if product is not None else None,
                productImage=cover.image_url if cover else None,
                quantity=i.quantity,
                size=i.size,
                price=i.price,
            )
        )
    return OrderOut(
        id=order.id,
        customer=customer,
        orderDate=order.order_date.isoformat(),
        status=order.status,
        totalAmount=order.total_amount,
        shippingAddress=order.shipping_address,
        items=items,
    )


@router.get("/", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    orders = unwrap(order_service.list_orders(db))
    return [map_order_to_out(o) for o in orders]


@router.get("/{id}", response_model=OrderOut)
def get_order(id: int, db: Session = Depends(get_db), admin: str = Depends(require_admin)):
    return map_order_to_out(unwrap(order_service.get_order(db, id)))


@router.put("/{id}/status", response_model=OrderOut)
def update_order_status(
    id: int,
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
    admin: str = Depends(require_admin),
):
    result = order_service.update_order_status(db, id, payload.status)
    unwrap(result)
    # Reload with items and customer for the response
    return map_order_to_out(unwrap(order_service.get_order(db, id)))
