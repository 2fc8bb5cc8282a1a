from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.dependencies import current_user
from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.invoices.models import InvoiceCreateIn, InvoiceOut, InvoiceUpdateIn
from backoffice.invoices.services import (EXPORT_FIELDS, all_invoices, create_invoice, delete_invoice,
                                          export_rows, get_invoice, list_invoices, update_invoice)
from backoffice.schema.full_schema import InvoiceStatus, Store, Users
from backoffice.stores.dependencies import owned_store

invoices_router = APIRouter()


@invoices_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: InvoiceCreateIn, store: Store = Depends(owned_store),
                 user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    invoice = await create_invoice(session, store.id, payload, created_by=user.full_name)
    return success_response({"message": "Invoice created successfully", "invoice": to_out(InvoiceOut, invoice)},
                            status_code=status.HTTP_201_CREATED)


@invoices_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None),
                   customer_id: Optional[int] = Query(None, alias="customerId", ge=1),
                   invoice_status: Optional[InvoiceStatus] = Query(None, alias="status"),
                   min_amount: Optional[float] = Query(None, alias="minAmount", ge=0),
                   max_amount: Optional[float] = Query(None, alias="maxAmount", ge=0),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_invoices(session, store.id, pagination.page, pagination.page_size, search,
                                       customer_id, invoice_status, min_amount, max_amount)
    return success_response(paginated(to_out_list(InvoiceOut, items), total, pagination.page, pagination.page_size))


@invoices_router.get("/{store_id}/all")
async def list_every(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": to_out_list(InvoiceOut, await all_invoices(session, store.id))})


@invoices_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"invoices-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@invoices_router.get("/{store_id}/{invoice_id}")
async def get_one(invoice_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"invoice": to_out(InvoiceOut, await get_invoice(session, store.id, invoice_id))})


@invoices_router.put("/{store_id}/{invoice_id}")
async def update(payload: InvoiceUpdateIn, invoice_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    invoice = await update_invoice(session, store.id, invoice_id, payload)
    return success_response({"message": "Invoice updated successfully", "invoice": to_out(InvoiceOut, invoice)})


@invoices_router.delete("/{store_id}/{invoice_id}")
async def delete(invoice_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_invoice(session, store.id, invoice_id)
    return success_response({"message": "Invoice deleted successfully"})
