from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from .models import Cart, CartItem
from ..core.exceptions import ErrorCode, NotFoundError, ValidationError
from ..database.core import MAX_DB_INT
from ..database.repository import MarketplaceRepository

logger = logging.getLogger(__name__)


def _require_positive_qty(qty: Any) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0 or qty > MAX_DB_INT:
        raise ValidationError(
            "Quantity must be a positive integer",
            code=ErrorCode.INVALID_QUANTITY,
            context={"qty": str(qty)},
        )
    return qty


def _quantity_too_large(product_id: int) -> ValidationError:
    return ValidationError(
        f"Quantity may not exceed {MAX_DB_INT}",
        code=ErrorCode.INVALID_QUANTITY,
        context={"product_id": product_id},
    )


class CartService:
    """
    One mutable cart per user. Line item prices are never stored here; they are
    always read from the product's current state.
    """

    @staticmethod
    def get_or_create_cart(db: Session, user_id: UUID) -> Cart:
        """Get the user's cart, creating it on first access. Idempotent."""
        repo = MarketplaceRepository(db)
        cart = repo.get_cart(user_id)
        if cart:
            return cart

        try:
            cart = repo.create_cart(user_id)
            db.commit()
        except IntegrityError:
            # A concurrent request created it first
            db.rollback()
            cart = repo.get_cart(user_id)
            if cart is None:
                raise
        return cart

    @staticmethod
    def add_item(db: Session, user_id: UUID, product_id: int, qty: int = 1) -> CartItem:
        """
        Merge semantics: adds ``qty`` to an existing line item, or inserts a new one.

        The increment is a single SQL ``UPDATE ... SET qty = qty + :n`` so two
        concurrent adds of the same product both land.
        A merge that would take the line past ``MAX_DB_INT`` is rejected.
        """
        qty = _require_positive_qty(qty)
        repo = MarketplaceRepository(db)

        if repo.get_product(product_id) is None:
            raise NotFoundError("Product", product_id)

        cart = CartService.get_or_create_cart(db, user_id)
        cart_id = cart.id

        try:
            if repo.increment_cart_item(cart_id, product_id, qty, MAX_DB_INT) == 0:
                if repo.get_cart_item(cart_id, product_id) is not None:
                    raise _quantity_too_large(product_id)
                repo.insert_cart_item(cart_id, product_id, qty)
            db.commit()
        except IntegrityError:
            db.rollback()
            # Another request inserted the same line item between our update and insert
            logger.info(f"Cart item ({cart_id}, {product_id}) inserted concurrently; incrementing instead")
            if repo.increment_cart_item(cart_id, product_id, qty, MAX_DB_INT) == 0:
                existing = repo.get_cart_item(cart_id, product_id)
                db.rollback()
                if existing is not None:
                    raise _quantity_too_large(product_id)
                raise NotFoundError("Product", product_id)
            db.commit()
        except Exception:
            db.rollback()
            raise

        return repo.get_cart_item(cart_id, product_id)

    @staticmethod
    def set_item_quantity(db: Session, user_id: UUID, product_id: int, qty: int) -> Optional[CartItem]:
        """
        Overwrite semantics. A quantity of zero or less removes the line item
        and returns None.
        """
        if isinstance(qty, bool) or not isinstance(qty, int):
            raise ValidationError("Quantity must be an integer", code=ErrorCode.INVALID_QUANTITY)
        if qty > MAX_DB_INT:
            raise _quantity_too_large(product_id)

        if qty <= 0:
            CartService.remove_item(db, user_id, product_id)
            return None

        repo = MarketplaceRepository(db)
        cart = repo.get_cart(user_id)
        if cart is None:
            raise NotFoundError("Cart item", product_id)
        cart_id = cart.id

        try:
            updated = repo.set_cart_item_qty(cart_id, product_id, qty)
            if updated == 0:
                db.rollback()
                raise NotFoundError("Cart item", product_id)
            db.commit()
        except NotFoundError:
            raise
        except Exception:
            db.rollback()
            raise

        return repo.get_cart_item(cart_id, product_id)

    @staticmethod
    def remove_item(db: Session, user_id: UUID, product_id: int) -> None:
        """Delete a line item. Missing item or missing cart is not an error."""
        repo = MarketplaceRepository(db)
        cart = repo.get_cart(user_id)
        if cart is None:
            return
        try:
            repo.delete_cart_item(cart.id, product_id)
            db.commit()
        except Exception:
            db.rollback()
            raise

    @staticmethod
    def clear(db: Session, user_id: UUID) -> None:
        """Delete every line item in the user's cart. No cart is not an error."""
        repo = MarketplaceRepository(db)
        cart = repo.get_cart(user_id)
        if cart is None:
            return
        try:
            removed = repo.delete_cart_items(cart.id)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.debug(f"Cleared {removed} items from cart {cart.id}")

    @staticmethod
    def get_with_items(db: Session, user_id: UUID) -> Dict[str, Any]:
        """Cart plus its line items, each joined with the product's current title, price and image."""
        cart = CartService.get_or_create_cart(db, user_id)
        items = MarketplaceRepository(db).get_cart_items(cart.id)

        return {
            "cart": cart,
            "items": items,
            "item_count": sum(item.qty for item in items),
            "subtotal_cents": sum(item.product.price_cents * item.qty for item in items),
        }
