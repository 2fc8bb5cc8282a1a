from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class CustomerGroupCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class CustomerGroupUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None

    model_config = {"extra": "forbid"}


class CustomerGroupOut(CamelModel):
    id: int
    store_id: int
    name: str
    description: Optional[str] = None
    customer_count: int = 0
    created_at: datetime
    updated_at: datetime
