from typing import Optional

from sqlalchemy import delete, func, or_, select

from backoffice.auth.utils import normalize_email_address
from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Supplier, SupplierAddress, SupplierEmail, SupplierPhone
from backoffice.suppliers.models import SupplierCreateIn, SupplierUpdateIn
from backoffice.uploads import services as uploads

logger = get_logger("backoffice.suppliers")

EXPORT_FIELDS = ("id", "name", "supplierCode", "isActive", "emails", "phones", "addresses", "notes", "createdAt")

_CHILDREN = (
    ("emails", SupplierEmail),
    ("phones", SupplierPhone),
    ("addresses", SupplierAddress),
)


def _child_rows(supplier_id: int, relation: str, items) -> list:
    rows = []
    for item in items or []:
        values = item.model_dump()
        if relation == "emails":
            values["email"] = normalize_email_address(values["email"])
        rows.append(dict(_CHILDREN)[relation](supplier_id=supplier_id, **values))
    return rows


async def _replace_children(session, supplier_id: int, payload) -> None:
    for relation, model in _CHILDREN:
        if relation not in payload.model_fields_set:
            continue
        rows = _child_rows(supplier_id, relation, getattr(payload, relation))
        await session.execute(delete(model).where(model.supplier_id == supplier_id))
        session.add_all(rows)


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Supplier name is required")
    return name


async def create_supplier(session, store_id: int, payload: SupplierCreateIn) -> Supplier:
    payload = payload.model_copy()
    payload.model_fields_set.update(relation for relation, _ in _CHILDREN)

    supplier = Supplier(store_id=store_id, name=_clean_name(payload.name), supplier_code=payload.supplier_code,
                        image_url=payload.image_url, notes=payload.notes, is_active=payload.is_active)
    session.add(supplier)
    await session.flush()
    await _replace_children(session, supplier.id, payload)
    await session.commit()

    logger.info("supplier.created", extra={"store_id": store_id, "supplier_id": supplier.id})
    return await get_supplier(session, store_id, supplier.id)


async def get_supplier(session, store_id: int, supplier_id: int) -> Supplier:
    stmt = (select(Supplier).where(Supplier.id == supplier_id, Supplier.store_id == store_id)
            .execution_options(populate_existing=True))
    supplier = (await session.execute(stmt)).scalar_one_or_none()
    if supplier is None:
        raise NotFoundError("Supplier not found")
    return supplier


def _filters(store_id: int, search: Optional[str], is_active: Optional[bool]) -> list:
    filters = [Supplier.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Supplier.name.ilike(term), Supplier.supplier_code.ilike(term), Supplier.notes.ilike(term)))
    if is_active is not None:
        filters.append(Supplier.is_active.is_(is_active))
    return filters


async def list_suppliers(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                         is_active: Optional[bool] = None):
    filters = _filters(store_id, search, is_active)
    total = (await session.execute(select(func.count(Supplier.id)).where(*filters))).scalar_one()
    stmt = (select(Supplier).where(*filters).order_by(Supplier.created_at.desc(), Supplier.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_active_suppliers(session, store_id: int):
    stmt = (select(Supplier).where(Supplier.store_id == store_id, Supplier.is_active.is_(True))
            .order_by(Supplier.name.asc(), Supplier.id.asc()))
    return (await session.execute(stmt)).scalars().all()


async def update_supplier(session, store_id: int, supplier_id: int, payload: SupplierUpdateIn) -> Supplier:
    supplier = await get_supplier(session, store_id, supplier_id)
    updates = payload.model_dump(exclude_unset=True, exclude={relation for relation, _ in _CHILDREN})
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    if updates.get("is_active", True) is None:
        updates.pop("is_active")
    for field, value in updates.items():
        setattr(supplier, field, value)
    supplier.updated_at = now()

    await _replace_children(session, supplier.id, payload)
    await session.commit()
    logger.info("supplier.updated", extra={"supplier_id": supplier_id, "fields": sorted(payload.model_fields_set)})
    return await get_supplier(session, store_id, supplier_id)


async def set_supplier_image(session, store_id: int, supplier_id: int, image) -> Supplier:
    supplier = await get_supplier(session, store_id, supplier_id)
    supplier.image_url = await uploads.upload_image(image, f"stores/{store_id}/suppliers")
    supplier.updated_at = now()
    await session.commit()
    return await get_supplier(session, store_id, supplier_id)


async def delete_supplier(session, store_id: int, supplier_id: int) -> None:
    supplier = await get_supplier(session, store_id, supplier_id)
    for _, model in _CHILDREN:
        await session.execute(delete(model).where(model.supplier_id == supplier.id))
    await session.execute(delete(Supplier).where(Supplier.id == supplier.id))
    await session.commit()
    logger.info("supplier.deleted", extra={"store_id": store_id, "supplier_id": supplier_id})


def _address_line(a: SupplierAddress) -> str:
    parts = [a.title, a.address, a.city, a.state, a.country, a.zip_code]
    return ", ".join(p for p in parts if p)


async def export_rows(session, store_id: int) -> list:
    stmt = select(Supplier).where(Supplier.store_id == store_id).order_by(Supplier.name.asc(), Supplier.id.asc())
    return [
        {
            "id": s.id,
            "name": s.name,
            "supplierCode": s.supplier_code,
            "isActive": s.is_active,
            "emails": "; ".join(e.email for e in s.emails),
            "phones": "; ".join(p.phone for p in s.phones),
            "addresses": "; ".join(_address_line(a) for a in s.addresses),
            "notes": s.notes,
            "createdAt": s.created_at,
        }
        for s in (await session.execute(stmt)).scalars().all()
    ]
