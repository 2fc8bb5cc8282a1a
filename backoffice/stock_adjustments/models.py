from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import AdjustmentType
from backoffice.warehouses.models import WarehouseRefOut


class StockAdjustmentCreateIn(CamelModel):
    warehouse_id: int = Field(..., ge=1)
    product_id: int = Field(..., ge=1)
    reference_no: Optional[str] = Field(None, max_length=64)
    adjustment_date: Optional[datetime] = None
    quantity: int = Field(..., ge=1)
    type: AdjustmentType
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=255)


class StockAdjustmentUpdateIn(CamelModel):
    """Only bookkeeping fields; the stock movement itself is fixed once recorded."""
    reference_no: Optional[str] = Field(None, max_length=64)
    adjustment_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_by: Optional[str] = Field(None, max_length=255)

    model_config = {"extra": "forbid"}


class AdjustedProductOut(CamelModel):
    id: int
    name: str


class StockAdjustmentOut(CamelModel):
    id: int
    store_id: int
    warehouse_id: int
    product_id: int
    reference_no: Optional[str] = None
    adjustment_date: datetime
    quantity: int
    applied_change: int
    type: AdjustmentType
    notes: Optional[str] = None
    created_by: Optional[str] = None
    product: AdjustedProductOut
    warehouse: WarehouseRefOut
    created_at: datetime
    updated_at: datetime
