from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stocks.services import (EXPORT_FIELDS, export_rows, get_stock_at, list_all_stocks, list_stocks,
                                        stock_out, stocks_for_product)
from backoffice.stores.dependencies import owned_store

stocks_router = APIRouter()


@stocks_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None),
                   warehouse_id: Optional[int] = Query(None, alias="warehouseId", ge=1),
                   category_id: Optional[int] = Query(None, alias="categoryId", ge=1),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_stocks(session, store.id, pagination.page, pagination.page_size, search,
                                     warehouse_id, category_id)
    return success_response(paginated([stock_out(s) for s in items], total, pagination.page, pagination.page_size))


@stocks_router.get("/{store_id}/all")
async def list_everything(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": [stock_out(s) for s in await list_all_stocks(session, store.id)]})


@stocks_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"stock-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@stocks_router.get("/{store_id}/product/{product_id}")
async def by_product(product_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                     session: AsyncSession = Depends(get_session)):
    items = await stocks_for_product(session, store.id, product_id)
    return success_response({"items": [stock_out(s) for s in items]})


@stocks_router.get("/{store_id}/product/{product_id}/warehouse/{warehouse_id}")
async def at_warehouse(product_id: int = Path(..., ge=1), warehouse_id: int = Path(..., ge=1),
                       store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    stock = await get_stock_at(session, store.id, product_id, warehouse_id)
    return success_response({"stock": stock_out(stock)})
