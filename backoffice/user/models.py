from datetime import date
from typing import Optional
from backoffice.common.models import CamelModel


class ProfileUpdateIn(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    # personal kyc fields edited from the profile screen
    middle_name: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    means_of_identification: Optional[str] = None
    identification_number: Optional[str] = None
    identification_expiry: Optional[date] = None
    country_of_residency: Optional[str] = None
    contact_address: Optional[str] = None

    model_config = {"extra": "forbid"}
