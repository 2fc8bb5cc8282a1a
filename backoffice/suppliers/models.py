from datetime import datetime
from typing import List, Optional
from pydantic import Field
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import ContactType


class SupplierEmailIn(CamelModel):
    email: str
    type: ContactType = ContactType.PRIMARY


class SupplierPhoneIn(CamelModel):
    phone: str = Field(..., min_length=1, max_length=32)
    type: ContactType = ContactType.PRIMARY


class SupplierAddressIn(CamelModel):
    title: Optional[str] = None
    address: str = Field(..., min_length=1, max_length=512)
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class SupplierCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    supplier_code: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    emails: List[SupplierEmailIn] = []
    phones: List[SupplierPhoneIn] = []
    addresses: List[SupplierAddressIn] = []


class SupplierUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    supplier_code: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None
    emails: Optional[List[SupplierEmailIn]] = None
    phones: Optional[List[SupplierPhoneIn]] = None
    addresses: Optional[List[SupplierAddressIn]] = None

    model_config = {"extra": "forbid"}


class SupplierEmailOut(CamelModel):
    id: int
    email: str
    type: ContactType


class SupplierPhoneOut(CamelModel):
    id: int
    phone: str
    type: ContactType


class SupplierAddressOut(CamelModel):
    id: int
    title: Optional[str] = None
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class SupplierOut(CamelModel):
    id: int
    store_id: int
    name: str
    supplier_code: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    emails: List[SupplierEmailOut] = []
    phones: List[SupplierPhoneOut] = []
    addresses: List[SupplierAddressOut] = []
    created_at: datetime
    updated_at: datetime


class SupplierOptionOut(CamelModel):
    id: int
    name: str
    supplier_code: Optional[str] = None
