from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import Field, StringConstraints
from backoffice.common.models import CamelModel

OptionName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]


class VariantCreateIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    has_multiple_options: bool = False
    options: List[OptionName] = []


class VariantUpdateIn(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    has_multiple_options: Optional[bool] = None
    options: Optional[List[OptionName]] = None

    model_config = {"extra": "forbid"}


class VariantOptionOut(CamelModel):
    id: int
    name: str


class VariantOut(CamelModel):
    id: int
    store_id: int
    name: str
    has_multiple_options: bool
    options: List[VariantOptionOut] = []
    created_at: datetime
    updated_at: datetime
