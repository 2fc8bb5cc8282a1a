from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import UnitStatus


class UnitCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=64)
    status: UnitStatus = UnitStatus.ACTIVE


class UnitUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=64)
    status: Optional[UnitStatus] = None

    model_config = {"extra": "forbid"}


class UnitOut(CamelModel):
    id: int
    store_id: int
    name: str
    status: UnitStatus
    created_at: datetime
    updated_at: datetime
