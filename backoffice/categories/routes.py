from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.categories.models import CategoryCreateIn, CategoryUpdateIn
from backoffice.categories.services import (EXPORT_FIELDS, category_out, create_category, delete_category,
                                            export_rows, get_category, list_categories, update_category)
from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store

categories_router = APIRouter()


@categories_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: CategoryCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    category = await create_category(session, store.id, payload)
    return success_response({"message": "Category created successfully", "category": category_out(category)},
                            status_code=status.HTTP_201_CREATED)


@categories_router.get("/{store_id}")
async def list_all(category_name: Optional[str] = Query(None, alias="categoryName"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_categories(session, store.id, category_name, pagination.page, pagination.page_size)
    return success_response(paginated([category_out(c) for c in items], total, pagination.page, pagination.page_size))


@categories_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"categories-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@categories_router.get("/{store_id}/{category_id}")
async def get_one(category_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    category = await get_category(session, store.id, category_id)
    return success_response({"category": category_out(category)})


@categories_router.put("/{store_id}/{category_id}")
async def update(payload: CategoryUpdateIn, category_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    category = await update_category(session, store.id, category_id, payload)
    return success_response({"message": "Category updated successfully", "category": category_out(category)})


@categories_router.delete("/{store_id}/{category_id}")
async def delete(category_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_category(session, store.id, category_id)
    return success_response({"message": "Category deleted successfully"})
