"""Credential flows shared by back-office users and storefront customers.

Both principals carry the same credential columns (password hash, verification
code, reset code, refresh token), so the checks live here and the user and
customer services only decide how to look the principal up.
"""
from datetime import timedelta
from typing import Any, Callable, Awaitable, Optional

from backoffice.auth.constants import CODE_EXPIRE_MINUTES, INVALID_CREDENTIALS, INVALID_REFRESH, logger
from backoffice.auth.utils import (claim_id, codes_match, create_access_token, create_refresh_token,
                                   decode_refresh_token, generate_code, hash_password, validate_password,
                                   verify_password)
from backoffice.common.custom_exceptions import (BadRequestError, ConflictError, ForbiddenError,
                                                 UnauthorizedError)
from backoffice.common.utils import as_utc, now


def assign_verification_code(principal) -> str:
    code = generate_code()
    principal.verification_code = code
    principal.verification_code_expires = now() + timedelta(minutes=CODE_EXPIRE_MINUTES)
    return code


def assign_reset_code(principal) -> str:
    code = generate_code()
    principal.reset_password_token = code
    principal.reset_password_expires = now() + timedelta(minutes=CODE_EXPIRE_MINUTES)
    return code


def ensure_not_verified(principal) -> None:
    if principal.is_verified:
        raise ConflictError("Email already verified")


def check_verification_code(principal, code: str) -> None:
    ensure_not_verified(principal)
    if not codes_match(principal.verification_code, code):
        logger.warning("auth.verify.invalid_code", extra={"principal_id": principal.id})
        raise BadRequestError("Invalid verification code")
    expires = as_utc(principal.verification_code_expires)
    if expires is None or expires < now():
        raise BadRequestError("Verification code has expired")


def mark_verified(principal) -> None:
    principal.is_verified = True
    principal.verification_code = None
    principal.verification_code_expires = None


def check_reset_code(principal, code: str) -> None:
    if not codes_match(principal.reset_password_token, code):
        raise BadRequestError("Invalid reset code")
    expires = as_utc(principal.reset_password_expires)
    if expires is None or expires < now():
        raise BadRequestError("Reset code has expired")


async def apply_new_password(principal, new_password: str) -> None:
    validate_password(new_password)
    principal.password_hash = await hash_password(new_password)


async def check_login(principal, password: str) -> None:
    # same message for unknown email and wrong password
    if principal is None or not await verify_password(password or "", principal.password_hash):
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not principal.is_verified:
        raise ForbiddenError("Please verify your email first")


def issue_tokens(principal, scope: str, extra: Optional[dict] = None) -> tuple[str, str]:
    """Mint an access/refresh pair and remember the refresh token on the principal."""
    access = create_access_token(principal.id, scope, extra)
    refresh = create_refresh_token(principal.id, scope, extra)
    principal.refresh_token = refresh
    principal.last_active = now()
    return access, refresh


async def refresh_access(refresh_token: Optional[str], scope: str,
                         load: Callable[[int, dict], Awaitable[Any]]) -> str:
    """Validate a refresh token against its signature and the stored copy, return a new access token."""
    claims = decode_refresh_token(refresh_token) if refresh_token else None
    principal_id = claim_id(claims)
    if principal_id is None or claims.get("scope") != scope:
        raise UnauthorizedError(INVALID_REFRESH)

    principal = await load(principal_id, claims)
    if principal is None or not principal.refresh_token or not codes_match(principal.refresh_token, refresh_token):
        logger.warning("auth.refresh.rejected", extra={"principal_id": principal_id, "scope": scope})
        raise UnauthorizedError(INVALID_REFRESH)

    extra = {k: v for k, v in claims.items() if k not in ("id", "scope", "iat", "exp", "jti")}
    return create_access_token(principal.id, scope, extra)
