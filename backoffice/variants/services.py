from typing import List, Optional

from sqlalchemy import delete, func, select

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import ProductVariant, ProductVariantOption
from backoffice.variants.models import VariantCreateIn, VariantUpdateIn

logger = get_logger("backoffice.variants")

EXPORT_FIELDS = ("id", "name", "hasMultipleOptions", "options", "createdAt")


async def _replace_options(session, variant_id: int, names: List[str]) -> None:
    await session.execute(delete(ProductVariantOption).where(ProductVariantOption.variant_id == variant_id))
    session.add_all([ProductVariantOption(variant_id=variant_id, name=n) for n in names])


async def create_variant(session, store_id: int, payload: VariantCreateIn) -> ProductVariant:
    name = payload.name.strip()
    if not name:
        raise BadRequestError("Variant name is required")
    variant = ProductVariant(store_id=store_id, name=name, has_multiple_options=payload.has_multiple_options)
    session.add(variant)
    await session.flush()
    session.add_all([ProductVariantOption(variant_id=variant.id, name=n) for n in payload.options])
    await session.commit()
    logger.info("variant.created", extra={"store_id": store_id, "variant_id": variant.id})
    return await get_variant(session, store_id, variant.id)


async def get_variant(session, store_id: int, variant_id: int) -> ProductVariant:
    stmt = (select(ProductVariant)
            .where(ProductVariant.id == variant_id, ProductVariant.store_id == store_id)
            .execution_options(populate_existing=True))
    variant = (await session.execute(stmt)).scalar_one_or_none()
    if variant is None:
        raise NotFoundError("Product variant not found")
    return variant


async def list_variants(session, store_id: int, search: Optional[str], page: int, page_size: int):
    filters = [ProductVariant.store_id == store_id]
    if search and search.strip():
        filters.append(ProductVariant.name.ilike(f"%{search.strip()}%"))
    total = (await session.execute(select(func.count(ProductVariant.id)).where(*filters))).scalar_one()
    stmt = (select(ProductVariant).where(*filters)
            .order_by(ProductVariant.created_at.desc(), ProductVariant.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def update_variant(session, store_id: int, variant_id: int, payload: VariantUpdateIn) -> ProductVariant:
    variant = await get_variant(session, store_id, variant_id)
    updates = payload.model_dump(exclude_unset=True, exclude={"options"})
    if "name" in updates:
        if not updates["name"] or not updates["name"].strip():
            raise BadRequestError("Variant name cannot be empty")
        updates["name"] = updates["name"].strip()
    for field, value in updates.items():
        if value is not None:
            setattr(variant, field, value)
    variant.updated_at = now()

    if "options" in payload.model_fields_set:
        await _replace_options(session, variant.id, payload.options or [])
    await session.commit()
    return await get_variant(session, store_id, variant_id)


async def delete_variant(session, store_id: int, variant_id: int) -> None:
    variant = await get_variant(session, store_id, variant_id)
    await session.execute(delete(ProductVariantOption).where(ProductVariantOption.variant_id == variant.id))
    await session.execute(delete(ProductVariant).where(ProductVariant.id == variant.id))
    await session.commit()
    logger.info("variant.deleted", extra={"store_id": store_id, "variant_id": variant_id})


async def export_rows(session, store_id: int) -> list:
    stmt = (select(ProductVariant).where(ProductVariant.store_id == store_id)
            .order_by(ProductVariant.created_at.desc(), ProductVariant.id.desc()))
    return [
        {"id": v.id, "name": v.name, "hasMultipleOptions": v.has_multiple_options,
         "options": ", ".join(o.name for o in v.options), "createdAt": v.created_at}
        for v in (await session.execute(stmt)).scalars().all()
    ]
