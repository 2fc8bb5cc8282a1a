from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class LocationCreateIn(CamelModel):
    location_name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    state: Optional[str] = None
    city: Optional[str] = None
    is_primary: bool = False


class LocationUpdateIn(CamelModel):
    location_name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = None
    city: Optional[str] = None
    is_primary: Optional[bool] = None

    model_config = {"extra": "forbid"}
