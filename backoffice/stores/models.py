from datetime import datetime
from typing import List, Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class StoreSummaryOut(CamelModel):
    id: int
    business_name: str
    store_url: str
    country: str
    currency: str
    logo_url: Optional[str] = None
    is_launched: bool


class StoreOut(StoreSummaryOut):
    user_id: int
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    launched_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class StoreUpdateIn(CamelModel):
    business_name: Optional[str] = None
    country: Optional[str] = None
    currency: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    model_config = {"extra": "forbid"}


class ShippingMethodIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=128)
    price: float = Field(0.0, ge=0)
    estimated_delivery: Optional[str] = None
    is_active: bool = True


class ShippingMethodOut(CamelModel):
    id: int
    name: str
    price: float
    estimated_delivery: Optional[str] = None
    is_active: bool


class ShippingIn(CamelModel):
    enabled: Optional[bool] = None
    flat_rate: Optional[float] = Field(None, ge=0)
    free_shipping_threshold: Optional[float] = Field(None, ge=0)
    processing_days: Optional[int] = Field(None, ge=0)
    methods: Optional[List[ShippingMethodIn]] = None


class ShippingConfigOut(CamelModel):
    enabled: bool
    flat_rate: Optional[float] = None
    free_shipping_threshold: Optional[float] = None
    processing_days: Optional[int] = None


class StoreSettingsIn(CamelModel):
    tagline: Optional[str] = None
    description: Optional[str] = None
    support_email: Optional[str] = None
    support_phone: Optional[str] = None
    primary_color: Optional[str] = None
    show_out_of_stock: Optional[bool] = None

    model_config = {"extra": "forbid"}


class StoreSettingsOut(CamelModel):
    tagline: Optional[str] = None
    description: Optional[str] = None
    support_email: Optional[str] = None
    support_phone: Optional[str] = None
    primary_color: Optional[str] = None
    show_out_of_stock: bool


class LocationOut(CamelModel):
    id: int
    store_id: int
    location_name: str
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: str
    is_primary: bool
    created_at: datetime
