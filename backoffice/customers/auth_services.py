"""Storefront shopper accounts: the user credential flows, scoped to one store."""
from sqlalchemy.exc import IntegrityError

from backoffice.auth import CUSTOMER_SCOPE
from backoffice.auth.constants import CODE_EXPIRE_MINUTES
from backoffice.auth.flows import (apply_new_password, assign_reset_code, assign_verification_code,
                                   check_login, check_reset_code, check_verification_code,
                                   ensure_not_verified, issue_tokens, mark_verified, refresh_access)
from backoffice.auth.utils import hash_password, normalize_email_address, require_text, validate_password
from backoffice.common.custom_exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from backoffice.common.models import to_out
from backoffice.customers.models import CustomerOut, CustomerRegisterIn
from backoffice.customers.repository import customer_by_email, customer_by_id
from backoffice.customers.services import logger
from backoffice.notifications import mailer
from backoffice.notifications.templates import password_reset_email, verification_email
from backoffice.schema.full_schema import Customer, Store


def _claims(store: Store) -> dict:
    return {"storeId": store.id}


async def _require_customer(session, store: Store, email: str) -> Customer:
    customer = await customer_by_email(session, store.id, normalize_email_address(email))
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


def _session_payload(customer: Customer, access: str, refresh: str) -> dict:
    return {"accessToken": access, "refreshToken": refresh, "customer": to_out(CustomerOut, customer)}


async def register_customer(session, store: Store, payload: CustomerRegisterIn) -> Customer:
    email = normalize_email_address(payload.email)
    first_name = require_text(payload.first_name, "First name")
    last_name = require_text(payload.last_name, "Last name")
    validate_password(payload.password)

    if await customer_by_email(session, store.id, email) is not None:
        raise ConflictError("Email already registered")

    customer = Customer(store_id=store.id, email=email, first_name=first_name, last_name=last_name,
                        phone=payload.phone)
    customer.password_hash = await hash_password(payload.password)
    code = assign_verification_code(customer)
    session.add(customer)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("Email already registered")

    logger.info("customer.registered", extra={"store_id": store.id, "customer_id": customer.id})
    subject, html = verification_email(first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(email, subject, html)
    return customer


async def verify_customer_email(session, store: Store, email: str, code: str) -> dict:
    customer = await _require_customer(session, store, email)
    check_verification_code(customer, code)
    mark_verified(customer)
    access, refresh = issue_tokens(customer, CUSTOMER_SCOPE, _claims(store))
    await session.commit()
    return _session_payload(customer, access, refresh)


async def resend_customer_verification(session, store: Store, email: str) -> None:
    customer = await _require_customer(session, store, email)
    ensure_not_verified(customer)
    code = assign_verification_code(customer)
    await session.commit()
    subject, html = verification_email(customer.first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(customer.email, subject, html)


async def login_customer(session, store: Store, email: str, password: str) -> dict:
    customer = await customer_by_email(session, store.id, normalize_email_address(email))
    try:
        await check_login(customer, password)
    except (UnauthorizedError, ForbiddenError):
        logger.warning("customer.login.failed", extra={"store_id": store.id, "email": email})
        raise
    access, refresh = issue_tokens(customer, CUSTOMER_SCOPE, _claims(store))
    await session.commit()
    logger.info("customer.login.success", extra={"customer_id": customer.id})
    return _session_payload(customer, access, refresh)


async def refresh_customer_token(session, store: Store, refresh_token: str) -> str:
    async def load(customer_id, claims):
        if claims.get("storeId") != store.id:
            return None
        return await customer_by_id(session, store.id, customer_id)

    return await refresh_access(refresh_token, CUSTOMER_SCOPE, load)


async def forgot_customer_password(session, store: Store, email: str) -> None:
    customer = await _require_customer(session, store, email)
    code = assign_reset_code(customer)
    await session.commit()
    subject, html = password_reset_email(customer.first_name, code, CODE_EXPIRE_MINUTES)
    await mailer.send_email(customer.email, subject, html)


async def verify_customer_reset_code(session, store: Store, email: str, code: str) -> None:
    check_reset_code(await _require_customer(session, store, email), code)


async def reset_customer_password(session, store: Store, email: str, code: str, new_password: str) -> None:
    customer = await _require_customer(session, store, email)
    check_reset_code(customer, code)
    await apply_new_password(customer, new_password)
    customer.reset_password_token = None
    customer.reset_password_expires = None
    await session.commit()


async def logout_customer(session, customer: Customer) -> None:
    customer.refresh_token = None
    await session.commit()
    logger.info("customer.logout", extra={"customer_id": customer.id})
