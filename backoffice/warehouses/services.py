from typing import Optional

from sqlalchemy import delete, func, or_, select

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Stock, StockAdjustment, Warehouse
from backoffice.warehouses.models import WarehouseCreateIn, WarehouseUpdateIn

logger = get_logger("backoffice.warehouses")

EXPORT_FIELDS = ("id", "name", "address", "city", "state", "country", "zipCode", "phone", "isActive", "createdAt")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Warehouse name is required")
    return name


async def create_warehouse(session, store_id: int, payload: WarehouseCreateIn) -> Warehouse:
    values = payload.model_dump()
    values["name"] = _clean_name(values["name"])
    warehouse = Warehouse(store_id=store_id, **values)
    session.add(warehouse)
    await session.commit()
    logger.info("warehouse.created", extra={"store_id": store_id, "warehouse_id": warehouse.id})
    return warehouse


async def get_warehouse(session, store_id: int, warehouse_id: int) -> Warehouse:
    warehouse = await session.get(Warehouse, warehouse_id)
    if warehouse is None or warehouse.store_id != store_id:
        logger.warning("warehouse.not_found", extra={"store_id": store_id, "warehouse_id": warehouse_id})
        raise NotFoundError("Warehouse not found")
    return warehouse


def _filters(store_id: int, search: Optional[str], is_active: Optional[bool]) -> list:
    filters = [Warehouse.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Warehouse.name.ilike(term), Warehouse.city.ilike(term)))
    if is_active is not None:
        filters.append(Warehouse.is_active.is_(is_active))
    return filters


async def list_warehouses(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                          is_active: Optional[bool] = None):
    filters = _filters(store_id, search, is_active)
    total = (await session.execute(select(func.count(Warehouse.id)).where(*filters))).scalar_one()
    stmt = (select(Warehouse).where(*filters).order_by(Warehouse.created_at.desc(), Warehouse.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_active_warehouses(session, store_id: int):
    stmt = (select(Warehouse).where(Warehouse.store_id == store_id, Warehouse.is_active.is_(True))
            .order_by(Warehouse.name.asc(), Warehouse.id.asc()))
    return (await session.execute(stmt)).scalars().all()


async def update_warehouse(session, store_id: int, warehouse_id: int, payload: WarehouseUpdateIn) -> Warehouse:
    warehouse = await get_warehouse(session, store_id, warehouse_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    if updates.get("is_active", True) is None:
        updates.pop("is_active")
    for field, value in updates.items():
        setattr(warehouse, field, value)
    warehouse.updated_at = now()
    await session.commit()
    logger.info("warehouse.updated", extra={"warehouse_id": warehouse_id, "fields": sorted(updates)})
    return warehouse


async def delete_warehouse(session, store_id: int, warehouse_id: int) -> None:
    """Drops the warehouse together with its stock rows and adjustment history."""
    warehouse = await get_warehouse(session, store_id, warehouse_id)
    await session.execute(delete(StockAdjustment).where(StockAdjustment.warehouse_id == warehouse.id))
    await session.execute(delete(Stock).where(Stock.warehouse_id == warehouse.id))
    await session.execute(delete(Warehouse).where(Warehouse.id == warehouse.id))
    await session.commit()
    logger.info("warehouse.deleted", extra={"store_id": store_id, "warehouse_id": warehouse_id})


async def export_rows(session, store_id: int) -> list:
    stmt = select(Warehouse).where(Warehouse.store_id == store_id).order_by(Warehouse.name.asc(), Warehouse.id.asc())
    return [
        {"id": w.id, "name": w.name, "address": w.address, "city": w.city, "state": w.state,
         "country": w.country, "zipCode": w.zip_code, "phone": w.phone, "isActive": w.is_active,
         "createdAt": w.created_at}
        for w in (await session.execute(stmt)).scalars().all()
    ]
