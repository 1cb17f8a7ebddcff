# ecofinds/products/models.py

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Uuid, CheckConstraint
from sqlalchemy.orm import relationship

from ..database.core import Base

PRODUCT_CONDITIONS = ("new", "excellent", "good", "fair", "poor")
PRODUCT_STATUSES = ("active", "sold", "inactive")


def _in_list(column, values):
    return f"{column} IN (" + ", ".join(f"'{value}'" for value in values) + ")"


class Category(Base):
    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)

    products = relationship("Product", back_populates="category")

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"


class Product(Base):
    """A listing offered for sale by its owner."""
    __tablename__ = 'products'
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(_in_list("condition", PRODUCT_CONDITIONS), name="ck_products_condition"),
        CheckConstraint(_in_list("status", PRODUCT_STATUSES), name="ck_products_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Uuid(as_uuid=True), ForeignKey('users.id'), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey('categories.id'), nullable=True, index=True)

    # Money is stored as an Integer in cents
    price_cents = Column(Integer, nullable=False)

    image_url = Column(String(500), nullable=True)
    condition = Column(String(20), nullable=False, default="good")
    location = Column(String(200), nullable=True)
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # --- Relationships ---
    owner = relationship("User", back_populates="products")
    category = relationship("Category", back_populates="products")

    def __repr__(self):
        return f"<Product(id={self.id}, title='{self.title}', price_cents={self.price_cents})>"
