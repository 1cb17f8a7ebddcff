from typing import Annotated

from fastapi import APIRouter, Path, Response, status

from .service import CartService
from ..auth.service import CurrentUser
from ..database.core import MAX_DB_INT, DbSession
from ..schemas.cart import (
    AddToCartRequest,
    CartItemResponse,
    CartResponse,
    UpdateCartItemRequest,
)

router = APIRouter(prefix="/cart", tags=["cart"])

ProductId = Annotated[int, Path(gt=0, le=MAX_DB_INT)]


@router.get("", response_model=CartResponse)
async def get_cart(current_user: CurrentUser, db: DbSession):
    """Get the user's cart with live product data"""
    return CartService.get_with_items(db, current_user.id)


@router.post("", response_model=CartItemResponse, status_code=status.HTTP_201_CREATED)
async def add_to_cart(
    cart_data: AddToCartRequest,
    current_user: CurrentUser,
    db: DbSession
):
    """Add a product to the cart, merging with an existing line item"""
    return CartService.add_item(db, current_user.id, cart_data.product_id, cart_data.qty)


@router.patch(
    "/{product_id}",
    response_model=CartItemResponse,
    responses={204: {"description": "Quantity was zero or less; item removed"}},
)
async def update_cart_item(
    product_id: ProductId,
    update_data: UpdateCartItemRequest,
    current_user: CurrentUser,
    db: DbSession
):
    """Set a line item's quantity. Zero or negative removes it."""
    item = CartService.set_item_quantity(db, current_user.id, product_id, update_data.qty)
    if item is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return item


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_from_cart(product_id: ProductId, current_user: CurrentUser, db: DbSession):
    CartService.remove_item(db, current_user.id, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(current_user: CurrentUser, db: DbSession):
    CartService.clear(db, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
