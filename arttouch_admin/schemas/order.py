from pydantic import BaseModel
from typing import List, Optional


class OrderStatusUpdate(BaseModel):
    # Free text: unknown labels are rejected by the order service, not by the schema
    status: str


class OrderCustomerOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class OrderItemOut(BaseModel):
    id: int
    productId: int
    productName: Optional[str] = None
    productImage: Optional[str] = None
    quantity: int
    size: Optional[str] = None
    price: float


class OrderOut(BaseModel):
    id: int
    customer: Optional[OrderCustomerOut] = None
    orderDate: str
    status: str
    totalAmount: float
    shippingAddress: Optional[str] = None
    items: List[OrderItemOut]
