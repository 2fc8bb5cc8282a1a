from sqlalchemy import select, update

from backoffice.common.custom_exceptions import NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.locations.models import LocationCreateIn, LocationUpdateIn
from backoffice.schema.full_schema import Location

logger = get_logger("backoffice.locations")


async def _clear_primary(session, store_id: int) -> None:
    await session.execute(
        update(Location)
        .where(Location.store_id == store_id, Location.is_primary.is_(True))
        .values(is_primary=False)
        .execution_options(synchronize_session="fetch")
    )


async def create_location(session, store_id: int, payload: LocationCreateIn) -> Location:
    if payload.is_primary:
        await _clear_primary(session, store_id)
    location = Location(store_id=store_id, **payload.model_dump())
    session.add(location)
    await session.commit()
    logger.info("location.created", extra={"store_id": store_id, "location_id": location.id})
    return location


async def list_locations(session, store_id: int):
    stmt = select(Location).where(Location.store_id == store_id).order_by(Location.is_primary.desc(), Location.id)
    return (await session.execute(stmt)).scalars().all()


async def get_location(session, store_id: int, location_id: int) -> Location:
    location = await session.get(Location, location_id)
    if location is None or location.store_id != store_id:
        raise NotFoundError("Location not found")
    return location


async def update_location(session, store_id: int, location_id: int, payload: LocationUpdateIn) -> Location:
    location = await get_location(session, store_id, location_id)
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("is_primary") is True:
        await _clear_primary(session, store_id)
    for field, value in updates.items():
        if value is None and field in ("location_name", "address", "country", "is_primary"):
            continue
        setattr(location, field, value)
    location.updated_at = now()
    await session.commit()
    return location


async def delete_location(session, store_id: int, location_id: int) -> None:
    location = await get_location(session, store_id, location_id)
    await session.delete(location)
    await session.commit()
    logger.info("location.deleted", extra={"store_id": store_id, "location_id": location_id})
