# ecofinds/database/repository.py

from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import select, update, delete
from sqlalchemy.orm import Session, selectinload, joinedload

from .models import User, Category, Product, Cart, CartItem, Order, OrderItem


class MarketplaceRepository:
    """
    Typed data access over the ORM models.

    Methods only flush; committing and rolling back is left to the service
    that owns the unit of work.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Users ---

    def get_user(self, user_id: UUID) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.username == username)).first()

    def create_user(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        self.db.flush()
        return user

    def update_user(self, user: User, fields: Dict[str, Any]) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.flush()
        return user

    # --- Categories ---

    def get_categories(self) -> List[Category]:
        return list(self.db.scalars(select(Category).order_by(Category.id)))

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def create_categories(self, names: Iterable[str]) -> List[Category]:
        categories = [Category(name=name) for name in names]
        self.db.add_all(categories)
        self.db.flush()
        return categories

    # --- Products ---

    def get_products(
        self,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Product]:
        """Active listings only, newest first."""
        query = select(Product).where(Product.status == "active")
        if category_id is not None:
            query = query.where(Product.category_id == category_id)
        if search:
            query = query.where(Product.title.icontains(search, autoescape=True))
        query = query.order_by(Product.created_at.desc(), Product.id.desc())
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        return list(self.db.scalars(query))

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def create_product(self, owner_id: UUID, fields: Dict[str, Any]) -> Product:
        product = Product(owner_id=owner_id, **fields)
        self.db.add(product)
        self.db.flush()
        return product

    def update_product(self, product: Product, fields: Dict[str, Any]) -> Product:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.flush()
        return product

    def delete_product(self, product: Product) -> None:
        """Deletes the product together with every cart and order line referencing it."""
        self.db.execute(
            delete(CartItem)
            .where(CartItem.product_id == product.id)
            .execution_options(synchronize_session=False)
        )
        self.db.execute(
            delete(OrderItem)
            .where(OrderItem.product_id == product.id)
            .execution_options(synchronize_session=False)
        )
        self.db.delete(product)
        self.db.flush()

    def get_user_products(self, user_id: UUID) -> List[Product]:
        query = (
            select(Product)
            .where(Product.owner_id == user_id)
            .order_by(Product.created_at.desc(), Product.id.desc())
        )
        return list(self.db.scalars(query))

    # --- Carts ---

    def get_cart(self, user_id: UUID, for_update: bool = False) -> Optional[Cart]:
        """With ``for_update`` the cart row stays locked until the transaction ends."""
        query = select(Cart).where(Cart.user_id == user_id)
        if for_update:
            query = query.with_for_update()
        return self.db.scalars(query).first()

    def create_cart(self, user_id: UUID) -> Cart:
        cart = Cart(user_id=user_id)
        self.db.add(cart)
        self.db.flush()
        return cart

    def get_cart_item(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        return self.db.get(CartItem, (cart_id, product_id), populate_existing=True)

    def get_cart_items(self, cart_id: int) -> List[CartItem]:
        """Line items joined with their current product."""
        query = (
            select(CartItem)
            .join(CartItem.product)
            .options(joinedload(CartItem.product))
            .where(CartItem.cart_id == cart_id)
            .order_by(Product.title, CartItem.product_id)
            .execution_options(populate_existing=True)
        )
        return list(self.db.scalars(query))

    def insert_cart_item(self, cart_id: int, product_id: int, qty: int) -> CartItem:
        item = CartItem(cart_id=cart_id, product_id=product_id, qty=qty)
        self.db.add(item)
        self.db.flush()
        return item

    def increment_cart_item(self, cart_id: int, product_id: int, qty: int, max_qty: Optional[int] = None) -> int:
        """
        Atomic ``qty = qty + :n`` in SQL. Returns the number of rows touched.

        With ``max_qty`` a line item that would end up above it is left alone.
        """
        query = update(CartItem).where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
        if max_qty is not None:
            query = query.where(CartItem.qty <= max_qty - qty)
        result = self.db.execute(
            query
            .values(qty=CartItem.qty + qty)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def set_cart_item_qty(self, cart_id: int, product_id: int, qty: int) -> int:
        result = self.db.execute(
            update(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .values(qty=qty)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, product_id: int) -> int:
        result = self.db.execute(
            delete(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItem)
            .where(CartItem.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # --- Orders ---

    def create_order(self, user_id: UUID, total_cents: int, items: List[Dict[str, int]]) -> Order:
        order = Order(
            user_id=user_id,
            total_cents=total_cents,
            status="completed",
            items=[
                OrderItem(
                    product_id=item["product_id"],
                    qty=item["qty"],
                    price_cents=item["price_cents"],
                )
                for item in items
            ],
        )
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> Optional[Order]:
        query = (
            select(Order)
            .options(selectinload(Order.items).joinedload(OrderItem.product))
            .where(Order.id == order_id)
        )
        return self.db.scalars(query).first()

    def get_user_orders(self, user_id: UUID) -> List[Order]:
        query = (
            select(Order)
            .options(selectinload(Order.items).joinedload(OrderItem.product))
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return list(self.db.scalars(query))
