from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.utils import paginated, success_response
from backoffice.customer_groups.models import CustomerGroupCreateIn, CustomerGroupUpdateIn
from backoffice.customer_groups.services import (EXPORT_FIELDS, create_group, delete_group, export_rows, get_group,
                                                 group_out, groups_out, list_all_groups, list_groups,
                                                 update_group)
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store

customer_groups_router = APIRouter()


@customer_groups_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: CustomerGroupCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    group = await create_group(session, store.id, payload)
    return success_response({"message": "Customer group created successfully",
                             "group": await group_out(session, group)}, status_code=status.HTTP_201_CREATED)


@customer_groups_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), pagination: Pagination = Depends(),
                   store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    items, total = await list_groups(session, store.id, search, pagination.page, pagination.page_size)
    return success_response(paginated(await groups_out(session, items), total, pagination.page,
                                      pagination.page_size))


@customer_groups_router.get("/{store_id}/all")
async def list_everything(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": await groups_out(session, await list_all_groups(session, store.id))})


@customer_groups_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"customer-groups-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@customer_groups_router.get("/{store_id}/{group_id}")
async def get_one(group_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    group = await get_group(session, store.id, group_id)
    return success_response({"group": await group_out(session, group)})


@customer_groups_router.put("/{store_id}/{group_id}")
async def update(payload: CustomerGroupUpdateIn, group_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    group = await update_group(session, store.id, group_id, payload)
    return success_response({"message": "Customer group updated successfully",
                             "group": await group_out(session, group)})


@customer_groups_router.delete("/{store_id}/{group_id}")
async def delete(group_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_group(session, store.id, group_id)
    return success_response({"message": "Customer group deleted successfully"})
