from fastapi import APIRouter, status
from typing import List

from .service import OrderService
from ..auth.service import CurrentUser
from ..database.core import DbSession
from ..schemas.orders import OrderResponse

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=List[OrderResponse])
async def list_orders(current_user: CurrentUser, db: DbSession):
    """Order history for the authenticated user, newest first"""
    return OrderService.list_orders(db, current_user.id)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def place_order(current_user: CurrentUser, db: DbSession):
    """Place an order from the current cart contents and empty the cart"""
    return OrderService.place_order(db, current_user.id)
