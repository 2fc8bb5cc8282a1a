from datetime import datetime
from typing import Optional
from pydantic import Field
from backoffice.common.models import CamelModel


class RegisterIn(CamelModel):
    email: str = Field(..., examples=["owner@shopmail.com"])
    first_name: str = Field(...)
    last_name: str = Field(...)
    password: str = Field(...)
    phone: Optional[str] = None
    how_did_you_find_us: Optional[str] = None


class EmailIn(CamelModel):
    email: str


class EmailCodeIn(CamelModel):
    email: str
    code: str


class LoginIn(CamelModel):
    email: str
    password: str


class RefreshIn(CamelModel):
    refresh_token: str


class ResetPasswordIn(CamelModel):
    email: str
    code: str
    new_password: str


class SetPasswordIn(CamelModel):
    new_password: str


class UserOut(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    full_name: Optional[str] = None
    username: Optional[str] = None
    phone: Optional[str] = None
    how_did_you_find_us: Optional[str] = None
    profile_photo_url: Optional[str] = None
    is_verified: bool
    last_active: Optional[datetime] = None
    created_at: datetime
