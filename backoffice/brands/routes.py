from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.brands.models import BrandCreateIn, BrandOut, BrandUpdateIn
from backoffice.brands.services import (EXPORT_FIELDS, create_brand, delete_brand, export_rows, get_brand,
                                        list_brands, set_brand_image, update_brand)
from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store

brands_router = APIRouter()


@brands_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: BrandCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    brand = await create_brand(session, store.id, payload)
    return success_response({"message": "Brand created successfully", "brand": to_out(BrandOut, brand)},
                            status_code=status.HTTP_201_CREATED)


@brands_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), pagination: Pagination = Depends(),
                   store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    items, total = await list_brands(session, store.id, search, pagination.page, pagination.page_size)
    return success_response(paginated(to_out_list(BrandOut, items), total, pagination.page, pagination.page_size))


@brands_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"brands-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@brands_router.get("/{store_id}/{brand_id}")
async def get_one(brand_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"brand": to_out(BrandOut, await get_brand(session, store.id, brand_id))})


@brands_router.put("/{store_id}/{brand_id}")
async def update(payload: BrandUpdateIn, brand_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    brand = await update_brand(session, store.id, brand_id, payload)
    return success_response({"message": "Brand updated successfully", "brand": to_out(BrandOut, brand)})


@brands_router.post("/{store_id}/{brand_id}/image")
async def upload_image(brand_id: int = Path(..., ge=1), image: UploadFile = File(...),
                       store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    brand = await set_brand_image(session, store.id, brand_id, image)
    return success_response({"brand": to_out(BrandOut, brand)})


@brands_router.delete("/{store_id}/{brand_id}")
async def delete(brand_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_brand(session, store.id, brand_id)
    return success_response({"message": "Brand deleted successfully"})
