from datetime import datetime
from typing import List, Optional
from pydantic import Field
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import InvoiceStatus, PaymentMethod


class InvoiceItemIn(CamelModel):
    product_id: Optional[int] = Field(None, ge=1)
    description: Optional[str] = Field(None, max_length=512)
    quantity: int = Field(..., ge=1)
    unit_price: float = Field(..., ge=0)
    tax_rate: float = Field(0, ge=0, le=100)


class InvoiceCreateIn(CamelModel):
    invoice_number: str = Field(..., min_length=1, max_length=64)
    customer_id: Optional[int] = Field(None, ge=1)
    supplier_id: Optional[int] = Field(None, ge=1)
    biller_name: Optional[str] = Field(None, max_length=255)
    invoice_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    payment_note: Optional[str] = None
    discount_amount: float = Field(0, ge=0)
    status: InvoiceStatus = InvoiceStatus.PENDING
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=255)
    items: List[InvoiceItemIn] = Field(..., min_length=1)


class InvoiceUpdateIn(CamelModel):
    invoice_number: Optional[str] = Field(None, min_length=1, max_length=64)
    customer_id: Optional[int] = Field(None, ge=1)
    supplier_id: Optional[int] = Field(None, ge=1)
    biller_name: Optional[str] = Field(None, max_length=255)
    invoice_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    payment_note: Optional[str] = None
    discount_amount: Optional[float] = Field(None, ge=0)
    paid_amount: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    notes: Optional[str] = None
    items: Optional[List[InvoiceItemIn]] = Field(None, min_length=1)

    model_config = {"extra": "forbid"}


class InvoiceItemOut(CamelModel):
    id: int
    product_id: Optional[int] = None
    description: Optional[str] = None
    quantity: int
    unit_price: float
    tax_rate: float
    tax_amount: float
    total_price: float


class InvoiceOut(CamelModel):
    id: int
    store_id: int
    invoice_number: str
    customer_id: Optional[int] = None
    supplier_id: Optional[int] = None
    biller_name: Optional[str] = None
    invoice_date: datetime
    due_date: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None
    payment_note: Optional[str] = None
    status: InvoiceStatus
    notes: Optional[str] = None
    created_by: Optional[str] = None
    total_amount: float
    tax_amount: float
    discount_amount: float
    paid_amount: float
    due_amount: float
    items: List[InvoiceItemOut] = []
    created_at: datetime
    updated_at: datetime
