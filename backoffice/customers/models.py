from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class _ContactFields(CamelModel):
    phone: Optional[str] = Field(None, max_length=32)
    instagram_handle: Optional[str] = Field(None, max_length=128)
    additional_info: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_country: Optional[str] = None
    shipping_zip_code: Optional[str] = None
    billing_address: Optional[str] = None
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_country: Optional[str] = None
    billing_zip_code: Optional[str] = None


class CustomerCreateIn(_ContactFields):
    first_name: str = Field(..., min_length=1, max_length=128)
    last_name: str = Field(..., min_length=1, max_length=128)
    email: Optional[str] = None
    same_as_shipping_address: bool = False
    subscribed_to_newsletter: bool = False
    customer_group_id: Optional[int] = Field(None, ge=1)
    send_welcome_email: bool = False


class CustomerUpdateIn(_ContactFields):
    first_name: Optional[str] = Field(None, min_length=1, max_length=128)
    last_name: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[str] = None
    same_as_shipping_address: Optional[bool] = None
    subscribed_to_newsletter: Optional[bool] = None
    customer_group_id: Optional[int] = Field(None, ge=1)

    model_config = {"extra": "forbid"}


class CustomerProfileIn(_ContactFields):
    """Fields a shopper may change on their own profile."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=128)
    last_name: Optional[str] = Field(None, min_length=1, max_length=128)
    same_as_shipping_address: Optional[bool] = None
    subscribed_to_newsletter: Optional[bool] = None

    model_config = {"extra": "forbid"}


class CustomerRegisterIn(CamelModel):
    email: str
    first_name: str
    last_name: str
    password: str
    phone: Optional[str] = None


class CustomerOut(_ContactFields):
    id: int
    store_id: int
    email: Optional[str] = None
    first_name: str
    last_name: str
    same_as_shipping_address: bool
    subscribed_to_newsletter: bool
    customer_group_id: Optional[int] = None
    is_verified: bool
    last_active: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
