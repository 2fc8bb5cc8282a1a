from typing import Optional

from sqlalchemy import func, or_, select

from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.product_groups.models import ProductGroupCreateIn, ProductGroupUpdateIn
from backoffice.schema.full_schema import ProductGroup
from backoffice.uploads import services as uploads

logger = get_logger("backoffice.product_groups")

EXPORT_FIELDS = ("id", "name", "description", "imageUrl", "createdAt")


def _clean_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("Product group name is required")
    return name


async def create_group(session, store_id: int, payload: ProductGroupCreateIn) -> ProductGroup:
    group = ProductGroup(store_id=store_id, name=_clean_name(payload.name), description=payload.description,
                         image_url=payload.image_url)
    session.add(group)
    await session.commit()
    logger.info("product_group.created", extra={"store_id": store_id, "group_id": group.id})
    return group


async def get_group(session, store_id: int, group_id: int) -> ProductGroup:
    group = await session.get(ProductGroup, group_id)
    if group is None or group.store_id != store_id:
        raise NotFoundError("Product group not found")
    return group


def _filters(store_id: int, search: Optional[str]) -> list:
    filters = [ProductGroup.store_id == store_id]
    if search and search.strip():
        term = f"%{search.strip()}%"
        filters.append(or_(ProductGroup.name.ilike(term), ProductGroup.description.ilike(term)))
    return filters


async def list_groups(session, store_id: int, search: Optional[str], page: int, page_size: int):
    filters = _filters(store_id, search)
    total = (await session.execute(select(func.count(ProductGroup.id)).where(*filters))).scalar_one()
    stmt = (select(ProductGroup).where(*filters).order_by(ProductGroup.created_at.desc(), ProductGroup.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def update_group(session, store_id: int, group_id: int, payload: ProductGroupUpdateIn) -> ProductGroup:
    group = await get_group(session, store_id, group_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        updates["name"] = _clean_name(updates["name"])
    for field, value in updates.items():
        setattr(group, field, value)
    group.updated_at = now()
    await session.commit()
    return group


async def set_group_image(session, store_id: int, group_id: int, image) -> ProductGroup:
    group = await get_group(session, store_id, group_id)
    group.image_url = await uploads.upload_image(image, f"stores/{store_id}/product-groups")
    group.updated_at = now()
    await session.commit()
    logger.info("product_group.image_updated", extra={"group_id": group_id})
    return group


async def delete_group(session, store_id: int, group_id: int) -> None:
    group = await get_group(session, store_id, group_id)
    await session.delete(group)
    await session.commit()
    logger.info("product_group.deleted", extra={"store_id": store_id, "group_id": group_id})


async def export_rows(session, store_id: int) -> list:
    stmt = (select(ProductGroup).where(ProductGroup.store_id == store_id)
            .order_by(ProductGroup.created_at.desc(), ProductGroup.id.desc()))
    return [
        {"id": g.id, "name": g.name, "description": g.description, "imageUrl": g.image_url,
         "createdAt": g.created_at}
        for g in (await session.execute(stmt)).scalars().all()
    ]
