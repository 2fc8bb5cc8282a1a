from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import selectinload

from backoffice.categories.models import CategoryCreateIn, CategoryUpdateIn, CategoryWithProductsOut
from backoffice.common.custom_exceptions import BadRequestError, NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Category, ProductCategory

logger = get_logger("backoffice.categories")

EXPORT_FIELDS = ("id", "name", "description", "image", "productCount", "createdAt")


def category_out(category: Category) -> dict:
    out = CategoryWithProductsOut.model_validate(category, from_attributes=True)
    out.product_ids = [link.product_id for link in category.product_links]
    return out.model_dump(by_alias=True, mode="json")


def _with_links():
    return selectinload(Category.product_links)


async def create_category(session, store_id: int, payload: CategoryCreateIn) -> Category:
    name = payload.name.strip()
    if not name:
        raise BadRequestError("Category name is required")
    category = Category(store_id=store_id, name=name, description=payload.description, image=payload.image)
    session.add(category)
    await session.commit()
    logger.info("category.created", extra={"store_id": store_id, "category_id": category.id})
    return await get_category(session, store_id, category.id)


async def get_category(session, store_id: int, category_id: int) -> Category:
    stmt = (select(Category).options(_with_links())
            .where(Category.id == category_id, Category.store_id == store_id)
            .execution_options(populate_existing=True))
    category = (await session.execute(stmt)).scalar_one_or_none()
    if category is None:
        logger.warning("category.not_found", extra={"store_id": store_id, "category_id": category_id})
        raise NotFoundError("Category not found")
    return category


async def list_categories(session, store_id: int, category_name: Optional[str], page: int, page_size: int):
    filters = [Category.store_id == store_id]
    if category_name:
        filters.append(Category.name.ilike(f"%{category_name.strip()}%"))

    total = (await session.execute(select(func.count(Category.id)).where(*filters))).scalar_one()
    stmt = (select(Category).options(_with_links()).where(*filters)
            .order_by(Category.name.asc(), Category.id.asc())
            .offset((page - 1) * page_size).limit(page_size))
    items = (await session.execute(stmt)).scalars().all()
    return items, total


async def update_category(session, store_id: int, category_id: int, payload: CategoryUpdateIn) -> Category:
    category = await get_category(session, store_id, category_id)
    updates = payload.model_dump(exclude_unset=True)
    if "name" in updates:
        if not updates["name"] or not updates["name"].strip():
            raise BadRequestError("Category name cannot be empty")
        updates["name"] = updates["name"].strip()

    # an explicit "" is a value, only absent keys are left alone
    for field, value in updates.items():
        setattr(category, field, value)
    category.updated_at = now()
    await session.commit()
    logger.info("category.updated", extra={"category_id": category_id, "fields": sorted(updates)})
    return await get_category(session, store_id, category_id)


async def delete_category(session, store_id: int, category_id: int) -> None:
    category = await get_category(session, store_id, category_id)
    await session.execute(delete(ProductCategory).where(ProductCategory.category_id == category.id))
    await session.execute(delete(Category).where(Category.id == category.id))
    await session.commit()
    logger.info("category.deleted", extra={"store_id": store_id, "category_id": category_id})


async def export_rows(session, store_id: int) -> list:
    stmt = (select(Category).options(_with_links()).where(Category.store_id == store_id)
            .order_by(Category.name.asc(), Category.id.asc()))
    return [
        {
            "id": c.id,
            "name": c.name,
            "description": c.description,
            "image": c.image,
            "productCount": len(c.product_links),
            "createdAt": c.created_at,
        }
        for c in (await session.execute(stmt)).scalars().all()
    ]
