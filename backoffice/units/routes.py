from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store, UnitStatus
from backoffice.stores.dependencies import owned_store
from backoffice.units.models import UnitCreateIn, UnitOut, UnitUpdateIn
from backoffice.units.services import (EXPORT_FIELDS, create_unit, delete_unit, export_rows, get_unit,
                                       list_all_units, list_units, update_unit)

units_router = APIRouter()


@units_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: UnitCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    unit = await create_unit(session, store.id, payload)
    return success_response({"message": "Unit created successfully", "unit": to_out(UnitOut, unit)},
                            status_code=status.HTTP_201_CREATED)


@units_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), unit_status: Optional[UnitStatus] = Query(None, alias="status"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_units(session, store.id, pagination.page, pagination.page_size, search, unit_status)
    return success_response(paginated(to_out_list(UnitOut, items), total, pagination.page, pagination.page_size))


@units_router.get("/{store_id}/all")
async def list_everything(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": to_out_list(UnitOut, await list_all_units(session, store.id))})


@units_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"units-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@units_router.get("/{store_id}/{unit_id}")
async def get_one(unit_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"unit": to_out(UnitOut, await get_unit(session, store.id, unit_id))})


@units_router.put("/{store_id}/{unit_id}")
async def update(payload: UnitUpdateIn, unit_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    unit = await update_unit(session, store.id, unit_id, payload)
    return success_response({"message": "Unit updated successfully", "unit": to_out(UnitOut, unit)})


@units_router.delete("/{store_id}/{unit_id}")
async def delete(unit_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_unit(session, store.id, unit_id)
    return success_response({"message": "Unit deleted successfully"})
