from typing import Optional
from sqlalchemy import func, select
from backoffice.schema.full_schema import (Location, ShippingConfig, ShippingMethod, Store,
                                           StoreSettings)


async def store_by_user(session, user_id: int) -> Optional[Store]:
    res = await session.execute(select(Store).where(Store.user_id == user_id))
    return res.scalar_one_or_none()


async def store_by_id(session, store_id: int) -> Optional[Store]:
    return await session.get(Store, store_id)


async def store_by_url(session, store_url: str) -> Optional[Store]:
    stmt = select(Store).where(func.lower(Store.store_url) == store_url.strip().lower())
    res = await session.execute(stmt)
    return res.scalar_one_or_none()


async def store_url_taken(session, store_url: str) -> bool:
    return await store_by_url(session, store_url) is not None


async def shipping_config_for(session, store_id: int) -> Optional[ShippingConfig]:
    res = await session.execute(select(ShippingConfig).where(ShippingConfig.store_id == store_id))
    return res.scalar_one_or_none()


async def shipping_methods_for(session, store_id: int, active_only: bool = False):
    stmt = select(ShippingMethod).where(ShippingMethod.store_id == store_id)
    if active_only:
        stmt = stmt.where(ShippingMethod.is_active.is_(True))
    res = await session.execute(stmt.order_by(ShippingMethod.id))
    return res.scalars().all()


async def settings_for(session, store_id: int) -> Optional[StoreSettings]:
    res = await session.execute(select(StoreSettings).where(StoreSettings.store_id == store_id))
    return res.scalar_one_or_none()


async def primary_location_for(session, store_id: int) -> Optional[Location]:
    stmt = (select(Location).where(Location.store_id == store_id)
            .order_by(Location.is_primary.desc(), Location.id).limit(1))
    res = await session.execute(stmt)
    return res.scalar_one_or_none()
