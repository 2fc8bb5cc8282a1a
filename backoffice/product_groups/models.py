from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class ProductGroupCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=1024)


class ProductGroupUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=1024)

    model_config = {"extra": "forbid"}


class ProductGroupOut(CamelModel):
    id: int
    store_id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
