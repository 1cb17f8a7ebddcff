# Central models file so every table is registered on Base.metadata
# before create_all runs.

from .core import Base

from ..users.models import User
from ..products.models import Category, Product
from ..cart.models import Cart, CartItem
from ..orders.models import Order, OrderItem

__all__ = [
    "Base",
    "User",
    "Category",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
]
