from datetime import date, datetime
from typing import List, Optional
from pydantic import Field, field_validator
from backoffice.common.models import CamelModel
from backoffice.schema.full_schema import KycDocumentType, KycStatus


class PersonalKycIn(CamelModel):
    middle_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    means_of_identification: Optional[str] = None
    identification_number: Optional[str] = None
    identification_expiry: Optional[date] = None
    country_of_residency: Optional[str] = None
    contact_address: Optional[str] = None

    model_config = {"extra": "forbid"}


class PersonalKycOut(CamelModel):
    id: int
    user_id: int
    status: KycStatus
    middle_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    means_of_identification: Optional[str] = None
    identification_number: Optional[str] = None
    identification_expiry: Optional[date] = None
    country_of_residency: Optional[str] = None
    contact_address: Optional[str] = None
    submitted_at: Optional[datetime] = None
    updated_at: datetime


class BusinessKycIn(CamelModel):
    business_name: str
    company_type: Optional[str] = None
    incorporation_number: Optional[str] = None
    date_of_incorporation: Optional[date] = None
    country_of_incorporation: Optional[str] = None
    tax_number: Optional[str] = None
    company_address: Optional[str] = None
    zip_or_postcode: Optional[str] = None
    state_or_province: Optional[str] = None
    city: Optional[str] = None
    business_description: Optional[str] = None
    company_website: Optional[str] = None


class BusinessKycOut(BusinessKycIn):
    id: int
    user_id: int
    updated_at: datetime


class KycDocumentIn(CamelModel):
    type: KycDocumentType
    url: str = Field(..., min_length=1)

    @field_validator("type", mode="before")
    @classmethod
    def upper_type(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


class KycDocumentsIn(CamelModel):
    documents: List[KycDocumentIn]


class KycDocumentOut(CamelModel):
    id: int
    type: KycDocumentType
    url: str
    created_at: datetime


class PepIn(CamelModel):
    name: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    description: Optional[str] = None


class PepsIn(CamelModel):
    peps: List[PepIn]


class PepOut(PepIn):
    id: int
