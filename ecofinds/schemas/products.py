from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field

from .base import RequestModel, ResponseModel
from ..database.core import MAX_DB_INT
from ..products.models import PRODUCT_CONDITIONS, PRODUCT_STATUSES

Condition = Literal[PRODUCT_CONDITIONS]
ListingStatus = Literal[PRODUCT_STATUSES]


class CategoryResponse(ResponseModel):
    id: int
    name: str


class ProductResponse(ResponseModel):
    id: int
    owner_id: UUID
    title: str
    description: Optional[str] = None
    category_id: Optional[int] = None
    price_cents: int
    image_url: Optional[str] = None
    condition: str
    location: Optional[str] = None
    status: str
    created_at: datetime


class ProductCreateRequest(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category_id: Optional[int] = Field(None, gt=0, le=MAX_DB_INT)
    price_cents: int = Field(..., ge=0, le=MAX_DB_INT, description="Price in cents")
    image_url: Optional[str] = Field(None, max_length=500)
    condition: Condition = "good"
    location: Optional[str] = Field(None, max_length=200)
    status: ListingStatus = "active"


class ProductUpdateRequest(RequestModel):
    """Partial update; only the fields present in the body are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category_id: Optional[int] = Field(None, gt=0, le=MAX_DB_INT)
    price_cents: Optional[int] = Field(None, ge=0, le=MAX_DB_INT)
    image_url: Optional[str] = Field(None, max_length=500)
    condition: Optional[Condition] = None
    location: Optional[str] = Field(None, max_length=200)
    status: Optional[ListingStatus] = None
