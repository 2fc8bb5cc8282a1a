from sqlalchemy.exc import IntegrityError

from backoffice.auth import USER_SCOPE
from backoffice.auth.constants import CODE_EXPIRE_MINUTES, logger
from backoffice.auth.flows import (apply_new_password, assign_reset_code, assign_verification_code,
                                   check_login, check_reset_code, check_verification_code,
                                   ensure_not_verified, issue_tokens, mark_verified, refresh_access)
from backoffice.auth.models import RegisterIn, UserOut
from backoffice.auth.repository import user_by_email, user_by_id, username_taken
from backoffice.auth.utils import (generate_username, hash_password, normalize_email_address,
                                   require_text, validate_password)
from backoffice.common.custom_exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from backoffice.common.models import to_out
from backoffice.notifications import mailer
from backoffice.notifications.templates import password_reset_email, verification_email
from backoffice.schema.full_schema import Users
from backoffice.stores.models import StoreSummaryOut
from backoffice.stores.repository import store_by_user


async def _unique_username(session, full_name: str) -> str:
    for _ in range(5):
        candidate = generate_username(full_name)
        if not await username_taken(session, candidate):
            return candidate
    return generate_username(full_name + "x")


async def _require_user(session, email: str) -> Users:
    user = await user_by_email(session, normalize_email_address(email))
    if not user:
        logger.warning("user.not_found", extra={"email": email})
        raise NotFoundError("User not found")
    return user


async def register_user(session, payload: RegisterIn) -> Users:
    email = normalize_email_address(payload.email)
    first_name = require_text(payload.first_name, "First name")
    last_name = require_text(payload.last_name, "Last name")
    validate_password(payload.password)

    if await user_by_email(session, email):
        logger.warning("user.duplicate", extra={"email": email})
        raise ConflictError("Email already registered")

    full_name = f"{first_name} {last_name}"
    user = Users(
        email=email,
        first_name=first_name,
        last_name=last_name,
        full_name=full_name,
        username=await _unique_username(session, full_name),
        phone=payload.phone,
        how_did_you_find_us=payload.how_did_you_find_us,
        password_hash=await hash_password(payload.password),
    )
    code = assign_verification_code(user)
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("user.create.integrity_error", extra={"email": email})
        raise ConflictError("Email already registered")

    logger.info("user.created", extra={"user_id": user.id})
    subject, html = verification_email(first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(email, subject, html)
    return user


async def _session_payload(session, user: Users, access: str, refresh: str) -> dict:
    store = await store_by_user(session, user.id)
    return {
        "accessToken": access,
        "refreshToken": refresh,
        "user": to_out(UserOut, user),
        "store": to_out(StoreSummaryOut, store) if store else None,
    }


async def verify_user_email(session, email: str, code: str) -> dict:
    user = await _require_user(session, email)
    check_verification_code(user, code)
    mark_verified(user)
    access, refresh = issue_tokens(user, USER_SCOPE)
    await session.commit()

    logger.info("user.verified", extra={"user_id": user.id})
    return await _session_payload(session, user, access, refresh)


async def resend_user_verification(session, email: str) -> None:
    user = await _require_user(session, email)
    ensure_not_verified(user)
    code = assign_verification_code(user)
    await session.commit()

    subject, html = verification_email(user.first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(user.email, subject, html)
    logger.info("user.verification_resent", extra={"user_id": user.id})


async def login_user(session, email: str, password: str) -> dict:
    user = await user_by_email(session, normalize_email_address(email))
    try:
        await check_login(user, password)
    except (UnauthorizedError, ForbiddenError):
        logger.warning("login.failed", extra={"email": email})
        raise
    access, refresh = issue_tokens(user, USER_SCOPE)
    await session.commit()

    logger.info("login.success", extra={"user_id": user.id})
    return await _session_payload(session, user, access, refresh)


async def refresh_user_token(session, refresh_token: str) -> str:
    async def load(user_id, claims):
        return await user_by_id(session, user_id)

    return await refresh_access(refresh_token, USER_SCOPE, load)


async def forgot_user_password(session, email: str) -> None:
    user = await _require_user(session, email)
    code = assign_reset_code(user)
    await session.commit()

    subject, html = password_reset_email(user.first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(user.email, subject, html)
    logger.info("user.reset_code_sent", extra={"user_id": user.id})


async def verify_user_reset_code(session, email: str, code: str) -> None:
    user = await _require_user(session, email)
    check_reset_code(user, code)


async def reset_user_password(session, email: str, code: str, new_password: str) -> None:
    user = await _require_user(session, email)
    check_reset_code(user, code)
    await apply_new_password(user, new_password)
    user.reset_password_token = None
    user.reset_password_expires = None
    await session.commit()
    logger.info("user.password_reset", extra={"user_id": user.id})


async def logout_user(session, user_id: int) -> None:
    user = await user_by_id(session, user_id)
    if user is not None:
        user.refresh_token = None
        await session.commit()
    logger.info("logout.success", extra={"user_id": user_id})


async def set_user_password(session, user: Users, new_password: str) -> None:
    await apply_new_password(user, new_password)
    await session.commit()
    logger.info("user.password_set", extra={"user_id": user.id})
