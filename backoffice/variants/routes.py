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
from backoffice.variants.models import VariantCreateIn, VariantOut, VariantUpdateIn
from backoffice.variants.services import (EXPORT_FIELDS, create_variant, delete_variant, export_rows,
                                          get_variant, list_variants, update_variant)

variants_router = APIRouter()


@variants_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: VariantCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    variant = await create_variant(session, store.id, payload)
    return success_response({"message": "Product variant created successfully",
                             "variant": to_out(VariantOut, variant)}, status_code=status.HTTP_201_CREATED)


@variants_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), pagination: Pagination = Depends(),
                   store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    items, total = await list_variants(session, store.id, search, pagination.page, pagination.page_size)
    return success_response(paginated(to_out_list(VariantOut, items), total, pagination.page, pagination.page_size))


@variants_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"product-variants-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@variants_router.get("/{store_id}/{variant_id}")
async def get_one(variant_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"variant": to_out(VariantOut, await get_variant(session, store.id, variant_id))})


@variants_router.put("/{store_id}/{variant_id}")
async def update(payload: VariantUpdateIn, variant_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    variant = await update_variant(session, store.id, variant_id, payload)
    return success_response({"message": "Product variant updated successfully",
                             "variant": to_out(VariantOut, variant)})


@variants_router.delete("/{store_id}/{variant_id}")
async def delete(variant_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_variant(session, store.id, variant_id)
    return success_response({"message": "Product variant deleted successfully"})
