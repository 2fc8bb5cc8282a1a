from datetime import datetime
from typing import List, Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class CategoryCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None

    model_config = {"extra": "forbid"}


class CategoryOut(CamelModel):
    id: int
    store_id: int
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategoryWithProductsOut(CategoryOut):
    product_ids: List[int] = []
