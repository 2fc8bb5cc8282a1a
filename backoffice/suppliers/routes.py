from typing import Optional

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store
from backoffice.suppliers.models import SupplierCreateIn, SupplierOptionOut, SupplierOut, SupplierUpdateIn
from backoffice.suppliers.services import (EXPORT_FIELDS, create_supplier, delete_supplier, export_rows,
                                           get_supplier, list_active_suppliers, list_suppliers,
                                           set_supplier_image, update_supplier)

suppliers_router = APIRouter()


@suppliers_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: SupplierCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    supplier = await create_supplier(session, store.id, payload)
    return success_response({"message": "Supplier created successfully", "supplier": to_out(SupplierOut, supplier)},
                            status_code=status.HTTP_201_CREATED)


@suppliers_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None), is_active: Optional[bool] = Query(None, alias="isActive"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_suppliers(session, store.id, pagination.page, pagination.page_size, search, is_active)
    return success_response(paginated(to_out_list(SupplierOut, items), total, pagination.page, pagination.page_size))


@suppliers_router.get("/{store_id}/all")
async def list_active(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": to_out_list(SupplierOptionOut, await list_active_suppliers(session, store.id))})


@suppliers_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"suppliers-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@suppliers_router.get("/{store_id}/{supplier_id}")
async def get_one(supplier_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"supplier": to_out(SupplierOut, await get_supplier(session, store.id, supplier_id))})


@suppliers_router.put("/{store_id}/{supplier_id}")
async def update(payload: SupplierUpdateIn, supplier_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    supplier = await update_supplier(session, store.id, supplier_id, payload)
    return success_response({"message": "Supplier updated successfully", "supplier": to_out(SupplierOut, supplier)})


@suppliers_router.post("/{store_id}/{supplier_id}/image")
async def upload_image(supplier_id: int = Path(..., ge=1), image: UploadFile = File(...),
                       store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    supplier = await set_supplier_image(session, store.id, supplier_id, image)
    return success_response({"supplier": to_out(SupplierOut, supplier)})


@suppliers_router.delete("/{store_id}/{supplier_id}")
async def delete(supplier_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_supplier(session, store.id, supplier_id)
    return success_response({"message": "Supplier deleted successfully"})
