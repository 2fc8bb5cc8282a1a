from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.product_groups.models import ProductGroupCreateIn, ProductGroupOut, ProductGroupUpdateIn
from backoffice.product_groups.services import (EXPORT_FIELDS, create_group, delete_group, export_rows, get_group,
                                                list_groups, set_group_image, update_group)
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store

product_groups_router = APIRouter()


@product_groups_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: ProductGroupCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    group = await create_group(session, store.id, payload)
    return success_response({"message": "Product group created successfully",
                             "group": to_out(ProductGroupOut, group)}, status_code=status.HTTP_201_CREATED)


@product_groups_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), pagination: Pagination = Depends(),
                   store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    items, total = await list_groups(session, store.id, search, pagination.page, pagination.page_size)
    return success_response(paginated(to_out_list(ProductGroupOut, items), total, pagination.page,
                                      pagination.page_size))


@product_groups_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"product-groups-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@product_groups_router.get("/{store_id}/{group_id}")
async def get_one(group_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"group": to_out(ProductGroupOut, await get_group(session, store.id, group_id))})


@product_groups_router.put("/{store_id}/{group_id}")
async def update(payload: ProductGroupUpdateIn, group_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    group = await update_group(session, store.id, group_id, payload)
    return success_response({"message": "Product group updated successfully",
                             "group": to_out(ProductGroupOut, group)})


@product_groups_router.post("/{store_id}/{group_id}/image")
async def upload_image(group_id: int = Path(..., ge=1), image: UploadFile = File(...),
                       store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    group = await set_group_image(session, store.id, group_id, image)
    return success_response({"group": to_out(ProductGroupOut, group)})


@product_groups_router.delete("/{store_id}/{group_id}")
async def delete(group_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_group(session, store.id, group_id)
    return success_response({"message": "Product group deleted successfully"})
