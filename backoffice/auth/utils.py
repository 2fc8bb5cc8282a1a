import asyncio
import hmac
import re
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from jose import JWTError, jwt
from passlib.context import CryptContext

from backoffice.auth.constants import (ACCESS_TOKEN_EXPIRE_MINUTES, MIN_PASSWORD_LENGTH,
                                       REFRESH_TOKEN_EXPIRE_DAYS, USERNAME_BASE_LENGTH)
from backoffice.common.custom_exceptions import BadRequestError
from backoffice.config.settings import config_settings

PASS_HASH_SCHEME = config_settings.PASS_HASH_SCHEME
JWT_ALGO = config_settings.JWT_ALGO

_ctx_kwargs = {"bcrypt__rounds": config_settings.BCRYPT_ROUNDS} if PASS_HASH_SCHEME == "bcrypt" else {}
pwd_context = CryptContext(schemes=[PASS_HASH_SCHEME], deprecated="auto", **_ctx_kwargs)


# bcrypt is cpu bound; keep it off the event loop
async def hash_password(plain_password: str) -> str:
    return await asyncio.to_thread(pwd_context.hash, plain_password)


async def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    return await asyncio.to_thread(pwd_context.verify, plain_password, password_hash)


def normalize_email_address(email: Optional[str]) -> str:
    """Validate and return the normalized, lowercased email. Raises BadRequestError."""
    if not email or not email.strip():
        raise BadRequestError("Email is required")
    try:
        v = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise BadRequestError(f"Invalid email: {e}")
    return v.normalized.lower()


def validate_password(password: Optional[str]) -> str:
    if not password:
        raise BadRequestError("Password is required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadRequestError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return password


def require_text(value: Optional[str], label: str) -> str:
    if value is None or not str(value).strip():
        raise BadRequestError(f"{label} is required")
    return str(value).strip()


def generate_code() -> str:
    """Six digit one-time code."""
    return str(secrets.randbelow(900000) + 100000)


def codes_match(expected: Optional[str], given: Optional[str]) -> bool:
    if not expected or not given:
        return False
    return hmac.compare_digest(expected.encode(), str(given).strip().encode())


def generate_username(full_name: str) -> str:
    base = re.sub(r"[^a-z0-9]", "", full_name.lower())[:USERNAME_BASE_LENGTH] or "user"
    return f"{base}{secrets.randbelow(9000) + 1000}"


def _encode(claims: dict, secret: str, lifetime: timedelta) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(claims=payload, key=secret, algorithm=JWT_ALGO)


def create_access_token(principal_id: int, scope: str, extra: Optional[dict] = None,
                        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    claims = {"id": str(principal_id), "scope": scope, **(extra or {})}
    return _encode(claims, config_settings.JWT_SECRET, timedelta(minutes=expires_minutes))


def create_refresh_token(principal_id: int, scope: str, extra: Optional[dict] = None,
                         expires_days: int = REFRESH_TOKEN_EXPIRE_DAYS) -> str:
    claims = {"id": str(principal_id), "scope": scope, **(extra or {})}
    return _encode(claims, config_settings.JWT_REFRESH_SECRET, timedelta(days=expires_days))


def decode_access_token(token: str):
    """To verify the signature , expiration and claims of an access token"""
    try:
        return jwt.decode(token, key=config_settings.JWT_SECRET, algorithms=[JWT_ALGO])
    except JWTError:
        return None


def decode_refresh_token(token: str):
    try:
        return jwt.decode(token, key=config_settings.JWT_REFRESH_SECRET, algorithms=[JWT_ALGO])
    except JWTError:
        return None


def claim_id(claims: Optional[dict]) -> Optional[int]:
    try:
        return int(claims["id"])
    except (TypeError, KeyError, ValueError):
        return None
