from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class WarehouseCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=512)
    city: Optional[str] = Field(None, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    country: Optional[str] = Field(None, max_length=128)
    zip_code: Optional[str] = Field(None, max_length=32)
    phone: Optional[str] = Field(None, max_length=32)
    is_active: bool = True


class WarehouseUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=512)
    city: Optional[str] = Field(None, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    country: Optional[str] = Field(None, max_length=128)
    zip_code: Optional[str] = Field(None, max_length=32)
    phone: Optional[str] = Field(None, max_length=32)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class WarehouseOut(CamelModel):
    id: int
    store_id: int
    name: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class WarehouseRefOut(CamelModel):
    id: int
    name: str
