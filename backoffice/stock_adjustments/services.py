from typing import Optional

from sqlalchemy import delete, func, or_, select

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import AdjustmentType, Product, StockAdjustment, Warehouse
from backoffice.stock_adjustments.models import StockAdjustmentCreateIn, StockAdjustmentUpdateIn
from backoffice.stocks.services import apply_change

logger = get_logger("backoffice.stock_adjustments")

EXPORT_FIELDS = ("id", "referenceNo", "warehouse", "product", "adjustmentDate", "quantity", "type", "createdBy",
                 "notes", "createdAt")


async def _check_owned(session, model, store_id: int, entity_id: int, label: str) -> None:
    found = (await session.execute(
        select(model.id).where(model.id == entity_id, model.store_id == store_id))).scalar_one_or_none()
    if found is None:
        raise BadRequestError(f"{label} does not exist or does not belong to this store")


def _signed(adjustment_type: AdjustmentType, quantity: int) -> int:
    return quantity if adjustment_type == AdjustmentType.INCREASE else -quantity


async def create_adjustment(session, store_id: int, payload: StockAdjustmentCreateIn) -> StockAdjustment:
    await _check_owned(session, Warehouse, store_id, payload.warehouse_id, "Warehouse")
    await _check_owned(session, Product, store_id, payload.product_id, "Product")

    applied = await apply_change(session, store_id, payload.product_id, payload.warehouse_id,
                                 _signed(payload.type, payload.quantity))
    adjustment = StockAdjustment(
        store_id=store_id,
        warehouse_id=payload.warehouse_id,
        product_id=payload.product_id,
        reference_no=payload.reference_no,
        adjustment_date=payload.adjustment_date or now(),
        quantity=payload.quantity,
        applied_change=applied,
        type=payload.type,
        notes=payload.notes,
        created_by=payload.created_by,
    )
    session.add(adjustment)
    await session.commit()

    logger.info("stock_adjustment.created", extra={
        "store_id": store_id, "adjustment_id": adjustment.id, "product_id": payload.product_id,
        "warehouse_id": payload.warehouse_id, "applied_change": applied})
    return await get_adjustment(session, store_id, adjustment.id)


async def get_adjustment(session, store_id: int, adjustment_id: int) -> StockAdjustment:
    stmt = (select(StockAdjustment)
            .where(StockAdjustment.id == adjustment_id, StockAdjustment.store_id == store_id)
            .execution_options(populate_existing=True))
    adjustment = (await session.execute(stmt)).scalar_one_or_none()
    if adjustment is None:
        raise NotFoundError("Stock adjustment not found")
    return adjustment


def _filters(store_id: int, search: Optional[str], warehouse_id: Optional[int], product_id: Optional[int],
             adjustment_type: Optional[AdjustmentType], created_by: Optional[str]) -> list:
    filters = [StockAdjustment.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(StockAdjustment.reference_no.ilike(term), StockAdjustment.notes.ilike(term)))
    if warehouse_id is not None:
        filters.append(StockAdjustment.warehouse_id == warehouse_id)
    if product_id is not None:
        filters.append(StockAdjustment.product_id == product_id)
    if adjustment_type is not None:
        filters.append(StockAdjustment.type == adjustment_type)
    if created_by:
        filters.append(StockAdjustment.created_by == created_by)
    return filters


async def list_adjustments(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                           warehouse_id: Optional[int] = None, product_id: Optional[int] = None,
                           adjustment_type: Optional[AdjustmentType] = None, created_by: Optional[str] = None):
    filters = _filters(store_id, search, warehouse_id, product_id, adjustment_type, created_by)
    total = (await session.execute(select(func.count(StockAdjustment.id)).where(*filters))).scalar_one()
    stmt = (select(StockAdjustment).where(*filters)
            .order_by(StockAdjustment.adjustment_date.desc(), StockAdjustment.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_all_adjustments(session, store_id: int):
    stmt = (select(StockAdjustment).where(StockAdjustment.store_id == store_id)
            .order_by(StockAdjustment.adjustment_date.desc(), StockAdjustment.id.desc()))
    return (await session.execute(stmt)).scalars().all()


async def update_adjustment(session, store_id: int, adjustment_id: int,
                            payload: StockAdjustmentUpdateIn) -> StockAdjustment:
    adjustment = await get_adjustment(session, store_id, adjustment_id)
    updates = payload.model_dump(exclude_unset=True)
    if updates.get("adjustment_date", True) is None:
        updates.pop("adjustment_date")
    for field, value in updates.items():
        setattr(adjustment, field, value)
    adjustment.updated_at = now()
    await session.commit()
    logger.info("stock_adjustment.updated", extra={"adjustment_id": adjustment_id, "fields": sorted(updates)})
    return await get_adjustment(session, store_id, adjustment_id)


async def delete_adjustment(session, store_id: int, adjustment_id: int) -> None:
    """Removes the record and takes back the change it made to stock."""
    adjustment = await get_adjustment(session, store_id, adjustment_id)
    reverted = await apply_change(session, store_id, adjustment.product_id, adjustment.warehouse_id,
                                  -adjustment.applied_change)
    await session.execute(delete(StockAdjustment).where(StockAdjustment.id == adjustment.id))
    await session.commit()
    logger.info("stock_adjustment.deleted", extra={"store_id": store_id, "adjustment_id": adjustment_id,
                                                   "reverted": reverted})


async def export_rows(session, store_id: int) -> list:
    return [
        {
            "id": a.id,
            "referenceNo": a.reference_no,
            "warehouse": a.warehouse.name,
            "product": a.product.name,
            "adjustmentDate": a.adjustment_date,
            "quantity": a.quantity,
            "type": a.type,
            "createdBy": a.created_by,
            "notes": a.notes,
            "createdAt": a.created_at,
        }
        for a in await list_all_adjustments(session, store_id)
    ]
