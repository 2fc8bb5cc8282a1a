from typing import Optional

from sqlalchemy import func, select

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Unit, UnitStatus
from backoffice.units.models import UnitCreateIn, UnitUpdateIn

logger = get_logger("backoffice.units")

EXPORT_FIELDS = ("id", "name", "status", "createdAt")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Unit name is required")
    return name


async def create_unit(session, store_id: int, payload: UnitCreateIn) -> Unit:
    unit = Unit(store_id=store_id, name=_clean_name(payload.name), status=payload.status)
    session.add(unit)
    await session.commit()
    logger.info("unit.created", extra={"store_id": store_id, "unit_id": unit.id})
    return unit


async def get_unit(session, store_id: int, unit_id: int) -> Unit:
    unit = await session.get(Unit, unit_id)
    if unit is None or unit.store_id != store_id:
        raise NotFoundError("Unit not found")
    return unit


def _filters(store_id: int, search: Optional[str], unit_status: Optional[UnitStatus]) -> list:
    filters = [Unit.store_id == store_id]
    if search and search.strip():
        filters.append(Unit.name.ilike(f"%{search.strip()}%"))
    if unit_status is not None:
        filters.append(Unit.status == unit_status)
    return filters


async def list_units(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                     unit_status: Optional[UnitStatus] = None):
    filters = _filters(store_id, search, unit_status)
    total = (await session.execute(select(func.count(Unit.id)).where(*filters))).scalar_one()
    stmt = (select(Unit).where(*filters).order_by(Unit.created_at.desc(), Unit.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_all_units(session, store_id: int):
    stmt = select(Unit).where(Unit.store_id == store_id).order_by(Unit.created_at.desc(), Unit.id.desc())
    return (await session.execute(stmt)).scalars().all()


async def update_unit(session, store_id: int, unit_id: int, payload: UnitUpdateIn) -> Unit:
    unit = await get_unit(session, store_id, unit_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    if updates.get("status", True) is None:
        updates.pop("status")
    for field, value in updates.items():
        setattr(unit, field, value)
    unit.updated_at = now()
    await session.commit()
    return unit


async def delete_unit(session, store_id: int, unit_id: int) -> None:
    unit = await get_unit(session, store_id, unit_id)
    await session.delete(unit)
    await session.commit()
    logger.info("unit.deleted", extra={"store_id": store_id, "unit_id": unit_id})


async def export_rows(session, store_id: int) -> list:
    return [
        {"id": u.id, "name": u.name, "status": u.status, "createdAt": u.created_at}
        for u in await list_all_units(session, store_id)
    ]
