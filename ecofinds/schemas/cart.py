from datetime import datetime
from typing import List, Optional

from pydantic import Field, StrictInt

from .base import RequestModel, ResponseModel
from ..database.core import MAX_DB_INT


class CartProductSnapshot(ResponseModel):
    """Current state of the product behind a line item."""
    id: int
    title: str
    price_cents: int
    image_url: Optional[str] = None
    status: str


class CartItemResponse(ResponseModel):
    cart_id: int
    product_id: int
    qty: int


class CartLineResponse(CartItemResponse):
    product: CartProductSnapshot


class CartInfo(ResponseModel):
    id: int
    created_at: Optional[datetime] = None


class CartResponse(ResponseModel):
    cart: CartInfo
    items: List[CartLineResponse]
    item_count: int
    subtotal_cents: int


class AddToCartRequest(RequestModel):
    product_id: StrictInt = Field(..., gt=0, le=MAX_DB_INT)
    qty: StrictInt = Field(1, gt=0, le=MAX_DB_INT)


class UpdateCartItemRequest(RequestModel):
    # Zero or negative removes the line item
    qty: StrictInt = Field(..., le=MAX_DB_INT)
