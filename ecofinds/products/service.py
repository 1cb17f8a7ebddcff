from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import logging

from .models import Category, Product
from ..core.config import settings
from ..core.exceptions import ErrorCode, ForbiddenError, NotFoundError, ValidationError
from ..database.repository import MarketplaceRepository
from ..schemas.products import ProductCreateRequest, ProductUpdateRequest

logger = logging.getLogger(__name__)

# Columns that may be omitted from a partial update but never set to null
NON_NULLABLE_FIELDS = ("title", "price_cents", "condition", "status")


class CategoryService:

    @staticmethod
    def list_categories(db: Session) -> List[Category]:
        return MarketplaceRepository(db).get_categories()

    @staticmethod
    def seed_categories(db: Session, names: Optional[List[str]] = None) -> int:
        """Insert the default categories when the table is empty. Returns how many were added."""
        repo = MarketplaceRepository(db)
        if repo.get_categories():
            return 0
        names = names if names is not None else settings.DEFAULT_CATEGORIES
        try:
            repo.create_categories(names)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Seeded {len(names)} categories")
        return len(names)


class ProductService:

    @staticmethod
    def search_products(
        db: Session,
        category_id: Optional[int] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Product]:
        """Active listings, optionally filtered by category and a case-insensitive title substring."""
        if limit is None:
            limit = settings.DEFAULT_PAGE_SIZE
        search = search.strip() if search else None
        return MarketplaceRepository(db).get_products(
            category_id=category_id,
            search=search or None,
            limit=limit,
            offset=offset,
        )

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        product = MarketplaceRepository(db).get_product(product_id)
        if not product:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def get_owned_product(db: Session, product_id: int, acting_user_id: UUID) -> Product:
        """Ownership check: only a listing's creator may mutate it."""
        product = ProductService.get_product(db, product_id)
        if product.owner_id != acting_user_id:
            logger.warning(f"User {acting_user_id} attempted to modify product {product_id} owned by {product.owner_id}")
            raise ForbiddenError("Not authorized to modify this product", context={"product_id": product_id})
        return product

    @staticmethod
    def _check_category(repo: MarketplaceRepository, category_id: Optional[int]) -> None:
        if category_id is not None and repo.get_category(category_id) is None:
            raise ValidationError(
                f"Unknown category: {category_id}",
                code=ErrorCode.UNKNOWN_CATEGORY,
                context={"category_id": category_id},
            )

    @staticmethod
    def create_product(db: Session, owner_id: UUID, product_data: ProductCreateRequest) -> Product:
        repo = MarketplaceRepository(db)
        ProductService._check_category(repo, product_data.category_id)
        try:
            product = repo.create_product(owner_id, product_data.model_dump())
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(product)
        logger.info(f"User {owner_id} created product {product.id}")
        return product

    @staticmethod
    def update_product(
        db: Session, product_id: int, acting_user_id: UUID, update_data: ProductUpdateRequest
    ) -> Product:
        product = ProductService.get_owned_product(db, product_id, acting_user_id)
        fields: Dict[str, Any] = update_data.model_dump(exclude_unset=True)

        null_fields = [name for name in NON_NULLABLE_FIELDS if name in fields and fields[name] is None]
        if null_fields:
            raise ValidationError(
                f"Fields cannot be null: {', '.join(null_fields)}",
                context={"fields": null_fields},
            )

        repo = MarketplaceRepository(db)
        if "category_id" in fields:
            ProductService._check_category(repo, fields["category_id"])

        try:
            repo.update_product(product, fields)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product_id: int, acting_user_id: UUID) -> None:
        product = ProductService.get_owned_product(db, product_id, acting_user_id)
        try:
            MarketplaceRepository(db).delete_product(product)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"User {acting_user_id} deleted product {product_id}")

    @staticmethod
    def list_user_products(db: Session, user_id: UUID) -> List[Product]:
        return MarketplaceRepository(db).get_user_products(user_id)
