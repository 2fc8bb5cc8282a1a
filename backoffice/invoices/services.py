from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError

from backoffice.common.custom_exceptions import BadRequestError, ConflictError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.invoices.calculations import invoice_totals, line_amounts, settle
from backoffice.invoices.models import InvoiceCreateIn, InvoiceItemIn, InvoiceUpdateIn
from backoffice.schema.full_schema import Customer, Invoice, InvoiceItem, InvoiceStatus, Product, Supplier

logger = get_logger("backoffice.invoices")

EXPORT_FIELDS = ("id", "invoiceNumber", "invoiceDate", "dueDate", "customer", "supplier", "billerName",
                 "status", "paymentMethod", "items", "taxAmount", "discountAmount", "totalAmount",
                 "paidAmount", "dueAmount", "createdBy")


async def _check_owned(session, model, store_id: int, entity_id: Optional[int], label: str) -> None:
    if entity_id is None:
        return
    found = (await session.execute(
        select(model.id).where(model.id == entity_id, model.store_id == store_id))).scalar_one_or_none()
    if found is None:
        raise BadRequestError(f"{label} does not exist or does not belong to this store")


async def _check_products(session, store_id: int, items: List[InvoiceItemIn]) -> None:
    ids = {i.product_id for i in items if i.product_id is not None}
    if not ids:
        return
    found = (await session.execute(
        select(func.count(Product.id)).where(Product.id.in_(ids), Product.store_id == store_id))).scalar_one()
    if found != len(ids):
        raise BadRequestError("One or more product IDs do not exist or do not belong to this store")


async def _ensure_number_free(session, store_id: int, number: str, exclude_id: Optional[int] = None) -> None:
    stmt = select(Invoice.id).where(Invoice.store_id == store_id, Invoice.invoice_number == number)
    if exclude_id is not None:
        stmt = stmt.where(Invoice.id != exclude_id)
    if (await session.execute(stmt.limit(1))).scalar_one_or_none() is not None:
        raise ConflictError("Invoice number already exists")


def _item_rows(invoice_id: int, items: List[InvoiceItemIn]) -> List[InvoiceItem]:
    rows = []
    for item in items:
        total, tax = line_amounts(item.quantity, item.unit_price, item.tax_rate)
        rows.append(InvoiceItem(invoice_id=invoice_id, product_id=item.product_id, description=item.description,
                                quantity=item.quantity, unit_price=item.unit_price, tax_rate=item.tax_rate,
                                tax_amount=tax, total_price=total))
    return rows


async def _commit(session, store_id: int) -> None:
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning("invoice.integrity_error", extra={"store_id": store_id})
        raise ConflictError("Invoice number already exists")


async def create_invoice(session, store_id: int, payload: InvoiceCreateIn, created_by: Optional[str] = None) -> Invoice:
    number = payload.invoice_number.strip()
    if not number:
        raise BadRequestError("Invoice number is required")
    await _ensure_number_free(session, store_id, number)
    await _check_owned(session, Customer, store_id, payload.customer_id, "Customer")
    await _check_owned(session, Supplier, store_id, payload.supplier_id, "Supplier")
    await _check_products(session, store_id, payload.items)

    values = payload.model_dump(exclude={"items", "invoice_number", "invoice_date", "created_by"})
    invoice = Invoice(store_id=store_id, invoice_number=number, invoice_date=payload.invoice_date or now(),
                      created_by=payload.created_by or created_by, **values)
    session.add(invoice)
    await session.flush()

    rows = _item_rows(invoice.id, payload.items)
    session.add_all(rows)
    total, tax = invoice_totals(((r.total_price, r.tax_amount) for r in rows), payload.discount_amount)
    invoice.total_amount, invoice.tax_amount = total, tax
    invoice.paid_amount, invoice.due_amount, invoice.status = settle(total, 0, payload.status)

    await _commit(session, store_id)
    logger.info("invoice.created", extra={"store_id": store_id, "invoice_id": invoice.id, "total": total})
    return await get_invoice(session, store_id, invoice.id)


async def get_invoice(session, store_id: int, invoice_id: int) -> Invoice:
    stmt = (select(Invoice).where(Invoice.id == invoice_id, Invoice.store_id == store_id)
            .execution_options(populate_existing=True))
    invoice = (await session.execute(stmt)).scalar_one_or_none()
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


def _filters(store_id: int, search: Optional[str], customer_id: Optional[int], status: Optional[InvoiceStatus],
             min_amount: Optional[float], max_amount: Optional[float]) -> list:
    filters = [Invoice.store_id == store_id]
    if customer_id is not None:
        filters.append(Invoice.customer_id == customer_id)
    if status is not None:
        filters.append(Invoice.status == status)
    if min_amount is not None:
        filters.append(Invoice.total_amount >= min_amount)
    if max_amount is not None:
        filters.append(Invoice.total_amount <= max_amount)
    if search and search.strip():
        term = f"%{search.strip()}%"
        matching_customers = select(Customer.id).where(
            Customer.store_id == store_id, or_(Customer.first_name.ilike(term), Customer.last_name.ilike(term)))
        filters.append(or_(Invoice.invoice_number.ilike(term), Invoice.biller_name.ilike(term),
                           Invoice.customer_id.in_(matching_customers)))
    return filters


async def list_invoices(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                        customer_id: Optional[int] = None, status: Optional[InvoiceStatus] = None,
                        min_amount: Optional[float] = None, max_amount: Optional[float] = None):
    filters = _filters(store_id, search, customer_id, status, min_amount, max_amount)
    total = (await session.execute(select(func.count(Invoice.id)).where(*filters))).scalar_one()
    stmt = (select(Invoice).where(*filters).order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def all_invoices(session, store_id: int):
    stmt = select(Invoice).where(Invoice.store_id == store_id).order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
    return (await session.execute(stmt)).scalars().all()


async def update_invoice(session, store_id: int, invoice_id: int, payload: InvoiceUpdateIn) -> Invoice:
    invoice = await get_invoice(session, store_id, invoice_id)
    fields = payload.model_fields_set

    if "invoice_number" in fields and payload.invoice_number is not None:
        number = payload.invoice_number.strip()
        if not number:
            raise BadRequestError("Invoice number cannot be empty")
        await _ensure_number_free(session, store_id, number, invoice.id)
        invoice.invoice_number = number
    if "customer_id" in fields:
        await _check_owned(session, Customer, store_id, payload.customer_id, "Customer")
    if "supplier_id" in fields:
        await _check_owned(session, Supplier, store_id, payload.supplier_id, "Supplier")
    if payload.items is not None:
        await _check_products(session, store_id, payload.items)

    updates = payload.model_dump(exclude_unset=True, exclude={"items", "invoice_number", "paid_amount", "status"})
    for field, value in updates.items():
        if value is None and field in ("invoice_date", "discount_amount"):
            continue
        setattr(invoice, field, value)

    # items and totals move together in this unit of work
    if payload.items is not None:
        await session.execute(delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id))
        rows = _item_rows(invoice.id, payload.items)
        session.add_all(rows)
        lines = [(r.total_price, r.tax_amount) for r in rows]
    else:
        lines = [(i.total_price, i.tax_amount) for i in invoice.items]
    total, tax = invoice_totals(lines, invoice.discount_amount)

    status = payload.status if payload.status is not None else invoice.status
    paid_given = payload.paid_amount is not None
    paid = payload.paid_amount if paid_given else invoice.paid_amount
    invoice.total_amount, invoice.tax_amount = total, tax
    invoice.paid_amount, invoice.due_amount, invoice.status = settle(total, paid, status, paid_given)
    invoice.updated_at = now()

    await _commit(session, store_id)
    logger.info("invoice.updated", extra={"invoice_id": invoice_id, "fields": sorted(fields)})
    return await get_invoice(session, store_id, invoice_id)


async def delete_invoice(session, store_id: int, invoice_id: int) -> None:
    invoice = await get_invoice(session, store_id, invoice_id)
    await session.execute(delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id))
    await session.execute(delete(Invoice).where(Invoice.id == invoice.id))
    await session.commit()
    logger.info("invoice.deleted", extra={"store_id": store_id, "invoice_id": invoice_id})


async def export_rows(session, store_id: int) -> list:
    invoices = await all_invoices(session, store_id)
    customer_ids = {i.customer_id for i in invoices if i.customer_id}
    supplier_ids = {i.supplier_id for i in invoices if i.supplier_id}
    customers, suppliers = {}, {}
    if customer_ids:
        res = await session.execute(select(Customer.id, Customer.first_name, Customer.last_name)
                                    .where(Customer.id.in_(customer_ids)))
        customers = {cid: f"{first} {last}" for cid, first, last in res.all()}
    if supplier_ids:
        res = await session.execute(select(Supplier.id, Supplier.name).where(Supplier.id.in_(supplier_ids)))
        suppliers = dict(res.all())

    return [
        {
            "id": i.id,
            "invoiceNumber": i.invoice_number,
            "invoiceDate": i.invoice_date,
            "dueDate": i.due_date,
            "customer": customers.get(i.customer_id),
            "supplier": suppliers.get(i.supplier_id),
            "billerName": i.biller_name,
            "status": i.status,
            "paymentMethod": i.payment_method,
            "items": len(i.items),
            "taxAmount": i.tax_amount,
            "discountAmount": i.discount_amount,
            "totalAmount": i.total_amount,
            "paidAmount": i.paid_amount,
            "dueAmount": i.due_amount,
            "createdBy": i.created_by,
        }
        for i in invoices
    ]
