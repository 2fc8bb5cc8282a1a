from typing import Optional

from sqlalchemy import func, or_, select

from backoffice.brands.models import BrandCreateIn, BrandUpdateIn
from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Brand
from backoffice.uploads import services as uploads

logger = get_logger("backoffice.brands")

EXPORT_FIELDS = ("id", "name", "description", "imageUrl", "createdAt")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Brand name is required")
    return name


async def create_brand(session, store_id: int, payload: BrandCreateIn) -> Brand:
    brand = Brand(store_id=store_id, name=_clean_name(payload.name), description=payload.description,
                  image_url=payload.image_url)
    session.add(brand)
    await session.commit()
    logger.info("brand.created", extra={"store_id": store_id, "brand_id": brand.id})
    return brand


async def get_brand(session, store_id: int, brand_id: int) -> Brand:
    brand = await session.get(Brand, brand_id)
    if brand is None or brand.store_id != store_id:
        logger.warning("brand.not_found", extra={"store_id": store_id, "brand_id": brand_id})
        raise NotFoundError("Brand not found")
    return brand


def _filters(store_id: int, search: Optional[str]) -> list:
    filters = [Brand.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(Brand.name.ilike(term), Brand.description.ilike(term)))
    return filters


async def list_brands(session, store_id: int, search: Optional[str], page: int, page_size: int):
    filters = _filters(store_id, search)
    total = (await session.execute(select(func.count(Brand.id)).where(*filters))).scalar_one()
    stmt = (select(Brand).where(*filters).order_by(Brand.created_at.desc(), Brand.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def update_brand(session, store_id: int, brand_id: int, payload: BrandUpdateIn) -> Brand:
    brand = await get_brand(session, store_id, brand_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    for field, value in updates.items():
        setattr(brand, field, value)
    brand.updated_at = now()
    await session.commit()
    return brand


async def set_brand_image(session, store_id: int, brand_id: int, image) -> Brand:
    brand = await get_brand(session, store_id, brand_id)
    brand.image_url = await uploads.upload_image(image, f"stores/{store_id}/brands")
    brand.updated_at = now()
    await session.commit()
    logger.info("brand.image_updated", extra={"brand_id": brand_id})
    return brand


async def delete_brand(session, store_id: int, brand_id: int) -> None:
    brand = await get_brand(session, store_id, brand_id)
    await session.delete(brand)
    await session.commit()
    logger.info("brand.deleted", extra={"store_id": store_id, "brand_id": brand_id})


async def export_rows(session, store_id: int) -> list:
    stmt = select(Brand).where(Brand.store_id == store_id).order_by(Brand.created_at.desc(), Brand.id.desc())
    return [
        {"id": b.id, "name": b.name, "description": b.description, "imageUrl": b.image_url,
         "createdAt": b.created_at}
        for b in (await session.execute(stmt)).scalars().all()
    ]
