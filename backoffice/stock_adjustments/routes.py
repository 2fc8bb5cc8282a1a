from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import AdjustmentType, Store
from backoffice.stock_adjustments.models import StockAdjustmentCreateIn, StockAdjustmentOut, StockAdjustmentUpdateIn
from backoffice.stock_adjustments.services import (EXPORT_FIELDS, create_adjustment, delete_adjustment,
                                                   export_rows, get_adjustment, list_adjustments,
                                                   list_all_adjustments, update_adjustment)
from backoffice.stores.dependencies import owned_store

stock_adjustments_router = APIRouter()


@stock_adjustments_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: StockAdjustmentCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    adjustment = await create_adjustment(session, store.id, payload)
    return success_response({"message": "Stock adjustment created successfully",
                             "adjustment": to_out(StockAdjustmentOut, adjustment)},
                            status_code=status.HTTP_201_CREATED)


@stock_adjustments_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None),
                   warehouse_id: Optional[int] = Query(None, alias="warehouseId", ge=1),
                   product_id: Optional[int] = Query(None, alias="productId", ge=1),
                   adjustment_type: Optional[AdjustmentType] = Query(None, alias="type"),
                   created_by: Optional[str] = Query(None, alias="createdBy"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_adjustments(session, store.id, pagination.page, pagination.page_size, search,
                                          warehouse_id, product_id, adjustment_type, created_by)
    return success_response(paginated(to_out_list(StockAdjustmentOut, items), total,
                                      pagination.page, pagination.page_size))


@stock_adjustments_router.get("/{store_id}/all")
async def list_everything(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    items = await list_all_adjustments(session, store.id)
    return success_response({"items": to_out_list(StockAdjustmentOut, items)})


@stock_adjustments_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"stock-adjustments-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@stock_adjustments_router.get("/{store_id}/{adjustment_id}")
async def get_one(adjustment_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    adjustment = await get_adjustment(session, store.id, adjustment_id)
    return success_response({"adjustment": to_out(StockAdjustmentOut, adjustment)})


@stock_adjustments_router.put("/{store_id}/{adjustment_id}")
async def update(payload: StockAdjustmentUpdateIn, adjustment_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    adjustment = await update_adjustment(session, store.id, adjustment_id, payload)
    return success_response({"message": "Stock adjustment updated successfully",
                             "adjustment": to_out(StockAdjustmentOut, adjustment)})


@stock_adjustments_router.delete("/{store_id}/{adjustment_id}")
async def delete(adjustment_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_adjustment(session, store.id, adjustment_id)
    return success_response({"message": "Stock adjustment deleted successfully"})
