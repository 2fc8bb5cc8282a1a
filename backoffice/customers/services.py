from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from backoffice.auth.utils import normalize_email_address, require_text
from backoffice.common.custom_exceptions import ConflictError, NotFoundError, UpstreamError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.customer_groups.services import ensure_group_in_store
from backoffice.customers.models import CustomerCreateIn, CustomerProfileIn, CustomerUpdateIn
from backoffice.customers.repository import customer_by_email, customer_by_id
from backoffice.notifications import mailer
from backoffice.notifications.templates import welcome_customer_email
from backoffice.schema.full_schema import Customer, Store

logger = get_logger("backoffice.customers")

EXPORT_FIELDS = ("id", "firstName", "lastName", "email", "phone", "instagramHandle", "shippingAddress",
                 "shippingCity", "shippingState", "shippingCountry", "shippingZipCode", "billingAddress",
                 "billingCity", "billingState", "billingCountry", "billingZipCode", "subscribedToNewsletter",
                 "isVerified", "createdAt")

_NON_NULLABLE = ("first_name", "last_name", "same_as_shipping_address", "subscribed_to_newsletter")


async def _ensure_email_free(session, store_id: int, email: str, exclude_id: Optional[int] = None) -> None:
    existing = await customer_by_email(session, store_id, email)
    if existing is not None and existing.id != exclude_id:
        raise ConflictError("Customer with this email already exists")


def _apply(customer: Customer, updates: dict) -> None:
    for field, value in updates.items():
        if value is None and field in _NON_NULLABLE:
            continue
        if field in ("first_name", "last_name"):
            value = require_text(value, "First name" if field == "first_name" else "Last name")
        setattr(customer, field, value)
    if customer.same_as_shipping_address:
        customer.billing_address = customer.shipping_address
        customer.billing_city = customer.shipping_city
        customer.billing_state = customer.shipping_state
        customer.billing_country = customer.shipping_country
        customer.billing_zip_code = customer.shipping_zip_code
    customer.updated_at = now()


async def _commit(session, store_id: int) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("customer.integrity_error", extra={"store_id": store_id})
        raise ConflictError("Customer with this email already exists")


async def send_welcome(store: Store, customer: Customer) -> bool:
    """Welcome mail is a courtesy; delivery failures are logged and do not fail the write."""
    if not customer.email:
        return False
    subject, html = welcome_customer_email(customer.first_name, store.business_name)
    try:
        return await mailer.send_email(customer.email, subject, html)
    except UpstreamError as e:
        logger.warning("customer.welcome_email_failed", extra={"customer_id": customer.id, "error": str(e)})
        return False


async def create_customer(session, store: Store, payload: CustomerCreateIn) -> Customer:
    values = payload.model_dump(exclude={"send_welcome_email", "email"})
    customer = Customer(store_id=store.id, first_name="", last_name="")
    if payload.email:
        customer.email = normalize_email_address(payload.email)
        await _ensure_email_free(session, store.id, customer.email)
    await ensure_group_in_store(session, store.id, payload.customer_group_id)
    _apply(customer, values)
    session.add(customer)
    await _commit(session, store.id)
    logger.info("customer.created", extra={"store_id": store.id, "customer_id": customer.id})

    if payload.send_welcome_email:
        await send_welcome(store, customer)
    return customer


async def get_customer(session, store_id: int, customer_id: int) -> Customer:
    customer = await customer_by_id(session, store_id, customer_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


def _filters(store_id: int, search: Optional[str], customer_group_id: Optional[int] = None) -> list:
    filters = [Customer.store_id == store_id]
    if customer_group_id is not None:
        filters.append(Customer.customer_group_id == customer_group_id)
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Customer.first_name.ilike(term), Customer.last_name.ilike(term),
                           Customer.email.ilike(term), Customer.phone.ilike(term)))
    return filters


async def list_customers(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                         customer_group_id: Optional[int] = None):
    filters = _filters(store_id, search, customer_group_id)
    total = (await session.execute(select(func.count(Customer.id)).where(*filters))).scalar_one()
    stmt = (select(Customer).where(*filters).order_by(Customer.created_at.desc(), Customer.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def update_customer(session, store_id: int, customer_id: int, payload: CustomerUpdateIn) -> Customer:
    customer = await get_customer(session, store_id, customer_id)
    updates = payload.model_dump(exclude_unset=True)
    if "email" in updates:
        email = updates.pop("email")
        customer.email = normalize_email_address(email) if email else None
        if customer.email:
            await _ensure_email_free(session, store_id, customer.email, customer.id)
    if "customer_group_id" in updates:
        await ensure_group_in_store(session, store_id, updates["customer_group_id"])
    _apply(customer, updates)
    await _commit(session, store_id)
    return customer


async def update_customer_profile(session, customer: Customer, payload: CustomerProfileIn) -> Customer:
    _apply(customer, payload.model_dump(exclude_unset=True))
    await session.commit()
    logger.info("customer.profile_updated", extra={"customer_id": customer.id,
                                                   "fields": sorted(payload.model_fields_set)})
    return customer


async def delete_customer(session, store_id: int, customer_id: int) -> None:
    customer = await get_customer(session, store_id, customer_id)
    await session.delete(customer)
    await session.commit()
    logger.info("customer.deleted", extra={"store_id": store_id, "customer_id": customer_id})


async def customer_stats(session, store_id: int) -> dict:
    total = (await session.execute(
        select(func.count(Customer.id)).where(Customer.store_id == store_id))).scalar_one()
    subscribers = (await session.execute(
        select(func.count(Customer.id)).where(Customer.store_id == store_id,
                                              Customer.subscribed_to_newsletter.is_(True)))).scalar_one()
    return {"totalCustomers": total, "newsletterSubscribers": subscribers}


async def export_rows(session, store_id: int) -> list:
    stmt = select(Customer).where(Customer.store_id == store_id).order_by(Customer.created_at.desc(), Customer.id.desc())
    rows = []
    for c in (await session.execute(stmt)).scalars().all():
        rows.append({
            "id": c.id, "firstName": c.first_name, "lastName": c.last_name, "email": c.email, "phone": c.phone,
            "instagramHandle": c.instagram_handle,
            "shippingAddress": c.shipping_address, "shippingCity": c.shipping_city,
            "shippingState": c.shipping_state, "shippingCountry": c.shipping_country,
            "shippingZipCode": c.shipping_zip_code,
            "billingAddress": c.billing_address, "billingCity": c.billing_city,
            "billingState": c.billing_state, "billingCountry": c.billing_country,
            "billingZipCode": c.billing_zip_code,
            "subscribedToNewsletter": c.subscribed_to_newsletter, "isVerified": c.is_verified,
            "createdAt": c.created_at,
        })
    return rows
