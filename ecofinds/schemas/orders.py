from datetime import datetime
from typing import List, Optional
from uuid import UUID

from .base import ResponseModel


class OrderProductSummary(ResponseModel):
    id: int
    title: str
    image_url: Optional[str] = None


class OrderItemResponse(ResponseModel):
    order_id: int
    product_id: int
    qty: int
    price_cents: int
    product: OrderProductSummary


class OrderResponse(ResponseModel):
    id: int
    user_id: UUID
    total_cents: int
    status: str
    created_at: datetime
    items: List[OrderItemResponse]
