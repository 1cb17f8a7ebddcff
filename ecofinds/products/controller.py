from typing import Annotated, List, Optional

from fastapi import APIRouter, Path, Query, Response, status

from .service import CategoryService, ProductService
from ..auth.service import CurrentUser
from ..core.config import settings
from ..database.core import MAX_DB_INT, DbSession
from ..schemas.products import (
    CategoryResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)

router = APIRouter(tags=["products"])

ProductId = Annotated[int, Path(gt=0, le=MAX_DB_INT)]


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(db: DbSession):
    """List all product categories."""
    return CategoryService.list_categories(db)


@router.get("/products", response_model=List[ProductResponse])
async def search_products(
    db: DbSession,
    category_id: Optional[int] = Query(None, alias="categoryId", gt=0, le=MAX_DB_INT),
    search: Optional[str] = Query(None, max_length=200),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0, le=MAX_DB_INT),
):
    """Active listings, filtered by category and title substring."""
    return ProductService.search_products(db, category_id, search, limit, offset)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: ProductId, db: DbSession):
    return ProductService.get_product(db, product_id)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreateRequest,
    current_user: CurrentUser,
    db: DbSession,
):
    """Create a listing owned by the caller."""
    return ProductService.create_product(db, current_user.id, product_data)


@router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: ProductId,
    update_data: ProductUpdateRequest,
    current_user: CurrentUser,
    db: DbSession,
):
    """Update a listing. Only its owner may do this."""
    return ProductService.update_product(db, product_id, current_user.id, update_data)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: ProductId, current_user: CurrentUser, db: DbSession):
    """Delete a listing. Only its owner may do this."""
    ProductService.delete_product(db, product_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user/products", response_model=List[ProductResponse])
async def list_my_products(current_user: CurrentUser, db: DbSession):
    """The caller's own listings, whatever their status."""
    return ProductService.list_user_products(db, current_user.id)
