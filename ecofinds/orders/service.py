from sqlalchemy.orm import Session
from typing import Dict, List
from uuid import UUID
import logging

from .models import Order
from ..core.exceptions import EmptyCartError, ErrorCode, ValidationError
from ..database.core import MAX_DB_INT
from ..database.repository import MarketplaceRepository

logger = logging.getLogger(__name__)


class OrderService:

    @staticmethod
    def place_order(db: Session, user_id: UUID) -> Order:
        """
        Turn the user's cart into an order.

        The order row, its items and the emptying of the cart are committed
        together; if any step fails nothing is written. Each item's price is
        copied from the product at this instant and never changes afterwards.

        The cart row is locked for the whole transaction so overlapping
        checkouts of one cart run one after the other. The second one then
        finds the cart empty.
        """
        repo = MarketplaceRepository(db)
        cart = repo.get_cart(user_id, for_update=True)
        items = repo.get_cart_items(cart.id) if cart else []
        if not items:
            db.rollback()
            raise EmptyCartError()

        snapshot: List[Dict[str, int]] = [
            {
                "product_id": item.product_id,
                "qty": item.qty,
                "price_cents": item.product.price_cents,
            }
            for item in items
        ]
        total_cents = sum(line["price_cents"] * line["qty"] for line in snapshot)
        if total_cents > MAX_DB_INT:
            db.rollback()
            raise ValidationError(
                f"Order total may not exceed {MAX_DB_INT} cents",
                context={"total_cents": total_cents},
            )

        try:
            order = repo.create_order(user_id, total_cents, snapshot)
            order_id = order.id
            removed = repo.delete_cart_items(cart.id)
        except Exception:
            db.rollback()
            logger.exception(f"Failed to place order for user {user_id}")
            raise

        # Backends without row locks: the lines read above must be exactly the lines removed
        if removed != len(snapshot):
            db.rollback()
            logger.warning(
                f"Cart {cart.id} changed during checkout for user {user_id} "
                f"(read {len(snapshot)} lines, removed {removed})"
            )
            if removed == 0:
                raise EmptyCartError()
            raise ValidationError(
                "Cart changed during checkout; review it and try again",
                code=ErrorCode.CART_CHANGED,
            )

        try:
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"Failed to place order for user {user_id}")
            raise

        logger.info(f"User {user_id} placed order {order_id} for {total_cents} cents ({len(snapshot)} items)")
        return repo.get_order(order_id)

    @staticmethod
    def list_orders(db: Session, user_id: UUID) -> List[Order]:
        """All of the user's orders, newest first, with line items and product data."""
        return MarketplaceRepository(db).get_user_orders(user_id)
