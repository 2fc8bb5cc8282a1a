from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store
from backoffice.warehouses.models import WarehouseCreateIn, WarehouseOut, WarehouseRefOut, WarehouseUpdateIn
from backoffice.warehouses.services import (EXPORT_FIELDS, create_warehouse, delete_warehouse, export_rows,
                                            get_warehouse, list_active_warehouses, list_warehouses,
                                            update_warehouse)

warehouses_router = APIRouter()


@warehouses_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: WarehouseCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    warehouse = await create_warehouse(session, store.id, payload)
    return success_response({"message": "Warehouse created successfully",
                             "warehouse": to_out(WarehouseOut, warehouse)}, status_code=status.HTTP_201_CREATED)


@warehouses_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), is_active: Optional[bool] = Query(None, alias="isActive"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_warehouses(session, store.id, pagination.page, pagination.page_size, search, is_active)
    return success_response(paginated(to_out_list(WarehouseOut, items), total, pagination.page, pagination.page_size))


@warehouses_router.get("/{store_id}/all")
async def list_active(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": to_out_list(WarehouseRefOut, await list_active_warehouses(session, store.id))})


@warehouses_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"warehouses-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@warehouses_router.get("/{store_id}/{warehouse_id}")
async def get_one(warehouse_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"warehouse": to_out(WarehouseOut, await get_warehouse(session, store.id, warehouse_id))})


@warehouses_router.put("/{store_id}/{warehouse_id}")
async def update(payload: WarehouseUpdateIn, warehouse_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    warehouse = await update_warehouse(session, store.id, warehouse_id, payload)
    return success_response({"message": "Warehouse updated successfully", "warehouse": to_out(WarehouseOut, warehouse)})


@warehouses_router.delete("/{store_id}/{warehouse_id}")
async def delete(warehouse_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_warehouse(session, store.id, warehouse_id)
    return success_response({"message": "Warehouse deleted successfully"})
