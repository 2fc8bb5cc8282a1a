from typing import Optional

from fastapi import UploadFile
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from backoffice.common.custom_exceptions import BadRequestError, ConflictError, NotFoundError
from backoffice.common.utils import now
from backoffice.schema.full_schema import ShippingConfig, ShippingMethod, Store, StoreSettings, Users
from backoffice.stores.constants import (DEFAULT_CURRENCY, STORE_URL_MAX_LENGTH, STORE_URL_MIN_LENGTH,
                                         STORE_URL_RE, logger)
from backoffice.stores.models import ShippingIn, StoreSettingsIn, StoreUpdateIn
from backoffice.stores.repository import (settings_for, shipping_config_for, shipping_methods_for,
                                          store_by_user, store_url_taken)
from backoffice.uploads import services as uploads


def validate_store_url(store_url: Optional[str]) -> str:
    if not store_url:
        raise BadRequestError("Store URL is required")
    if not (STORE_URL_MIN_LENGTH <= len(store_url) <= STORE_URL_MAX_LENGTH) or not STORE_URL_RE.match(store_url):
        raise BadRequestError(
            "Store URL must be 3-63 characters of lowercase letters, digits and hyphens, "
            "and cannot start or end with a hyphen"
        )
    return store_url.lower()


def _required(value: Optional[str], message: str) -> str:
    if value is None or not value.strip():
        raise BadRequestError(message)
    return value.strip()


async def setup_store(session, user: Optional[Users], business_name: Optional[str], store_url: Optional[str],
                      country: Optional[str], currency: Optional[str] = None,
                      logo: Optional[UploadFile] = None) -> Store:
    if user is None:
        raise NotFoundError("User not found")
    if await store_by_user(session, user.id):
        raise ConflictError("User already has a store")

    url = validate_store_url(store_url)
    if await store_url_taken(session, url):
        logger.warning("store.url_taken", extra={"store_url": url})
        raise ConflictError("Store URL already taken")

    name = _required(business_name, "Business name is required")
    country = _required(country, "Country is required")

    logo_url = await uploads.maybe_upload_image(logo, folder="store-logos")

    store = Store(
        user_id=user.id,
        business_name=name,
        store_url=url,
        country=country,
        currency=(currency or DEFAULT_CURRENCY).strip().upper() or DEFAULT_CURRENCY,
        logo_url=logo_url,
    )
    user_id = user.id
    session.add(store)
    try:
        await session.commit()
    except IntegrityError:
        # lost a race against another setup for the same user or url
        await session.rollback()
        if await store_by_user(session, user_id) is not None:
            raise ConflictError("User already has a store")
        raise ConflictError("Store URL already taken")

    logger.info("store.created", extra={"store_id": store.id, "user_id": user_id})
    return store


async def get_my_store(session, user_id: int) -> Store:
    store = await store_by_user(session, user_id)
    if store is None:
        raise NotFoundError("Store not found")
    return store


async def update_store(session, user_id: int, payload: StoreUpdateIn, logo: Optional[UploadFile] = None) -> Store:
    store = await get_my_store(session, user_id)
    updates = payload.model_dump(exclude_unset=True)

    if "business_name" in updates:
        updates["business_name"] = _required(updates["business_name"], "Business name cannot be empty")
    if "country" in updates:
        updates["country"] = _required(updates["country"], "Country cannot be empty")
    if "currency" in updates:
        updates["currency"] = _required(updates["currency"], "Currency cannot be empty").upper()

    for field, value in updates.items():
        setattr(store, field, value)

    logo_url = await uploads.maybe_upload_image(logo, folder="store-logos")
    if logo_url:
        store.logo_url = logo_url

    store.updated_at = now()
    await session.commit()
    logger.info("store.updated", extra={"store_id": store.id, "fields": sorted(updates)})
    return store


async def launch_store(session, user_id: int) -> Store:
    store = await get_my_store(session, user_id)
    if store.is_launched:
        raise ConflictError("Store is already launched")
    store.is_launched = True
    store.launched_at = now()
    await session.commit()
    logger.info("store.launched", extra={"store_id": store.id})
    return store


async def get_shipping(session, store: Store) -> dict:
    return {
        "config": await shipping_config_for(session, store.id),
        "methods": await shipping_methods_for(session, store.id),
    }


async def save_shipping(session, store: Store, payload: ShippingIn) -> dict:
    """Upsert the shipping config; when methods are given they replace the stored ones."""
    updates = payload.model_dump(exclude_unset=True, exclude={"methods"})
    config = await shipping_config_for(session, store.id)
    if config is None:
        config = ShippingConfig(store_id=store.id)
        session.add(config)
    for field, value in updates.items():
        if field == "enabled" and value is None:
            continue
        setattr(config, field, value)
    config.updated_at = now()

    if payload.methods is not None:
        await session.execute(delete(ShippingMethod).where(ShippingMethod.store_id == store.id))
        session.add_all([ShippingMethod(store_id=store.id, **m.model_dump()) for m in payload.methods])

    await session.commit()
    logger.info("store.shipping_saved", extra={"store_id": store.id})
    return await get_shipping(session, store)


async def save_settings(session, store: Store, payload: StoreSettingsIn) -> StoreSettings:
    settings = await settings_for(session, store.id)
    if settings is None:
        settings = StoreSettings(store_id=store.id)
        session.add(settings)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "show_out_of_stock" and value is None:
            continue
        setattr(settings, field, value)
    settings.updated_at = now()
    await session.commit()
    logger.info("store.settings_saved", extra={"store_id": store.id})
    return settings
