"""Public, read-only projection of a launched store."""
from typing import Any, Awaitable, Callable

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from backoffice.brands.models import BrandOut
from backoffice.common.custom_exceptions import ForbiddenError, NotFoundError
from backoffice.common.models import to_out, to_out_list
from backoffice.products.models import ProductSummaryOut, StorefrontProductOut
from backoffice.schema.full_schema import Brand, Category, Product, ProductCategory
from backoffice.stores import repository
from backoffice.stores.constants import logger
from backoffice.stores.models import (LocationOut, ShippingConfigOut, ShippingMethodOut, StoreSettingsOut,
                                      StoreSummaryOut)


async def _best_effort(session_maker, part: str, store_id: int, default: Any,
                       fetch: Callable[[Any], Awaitable[Any]]) -> Any:
    # each optional part gets its own session so one failure cannot poison the others
    try:
        async with session_maker() as session:
            return await fetch(session)
    except Exception as e:
        logger.warning("storefront.part_failed", extra={"part": part, "store_id": store_id, "error": str(e)})
        return default


async def fetch_shipping(session, store_id: int):
    config = await repository.shipping_config_for(session, store_id)
    return to_out(ShippingConfigOut, config) if config else None


async def fetch_shipping_methods(session, store_id: int):
    return to_out_list(ShippingMethodOut, await repository.shipping_methods_for(session, store_id, active_only=True))


async def fetch_settings(session, store_id: int):
    settings = await repository.settings_for(session, store_id)
    return to_out(StoreSettingsOut, settings) if settings else None


async def fetch_location(session, store_id: int):
    location = await repository.primary_location_for(session, store_id)
    return to_out(LocationOut, location) if location else None


async def get_storefront(session, session_maker, store_url: str) -> dict:
    store = await repository.store_by_url(session, store_url)
    if store is None:
        raise NotFoundError("Store not found")
    if not store.is_launched:
        raise ForbiddenError("Store is not live yet")

    products = (await session.execute(
        select(Product)
        .where(Product.store_id == store.id, Product.hide_from_homepage.is_(False))
        .order_by(Product.created_at.desc(), Product.id.desc())
    )).scalars().all()

    categories = (await session.execute(
        select(Category)
        .options(selectinload(Category.product_links).selectinload(ProductCategory.product))
        .where(Category.store_id == store.id)
        .order_by(Category.name)
    )).scalars().all()

    brands = (await session.execute(
        select(Brand).where(Brand.store_id == store.id).order_by(Brand.name)
    )).scalars().all()

    sid = store.id
    shipping = await _best_effort(session_maker, "shipping", sid, None, lambda s: fetch_shipping(s, sid))
    methods = await _best_effort(session_maker, "shipping_methods", sid, [], lambda s: fetch_shipping_methods(s, sid))
    settings = await _best_effort(session_maker, "settings", sid, None, lambda s: fetch_settings(s, sid))
    location = await _best_effort(session_maker, "location", sid, None, lambda s: fetch_location(s, sid))

    logger.info("storefront.served", extra={"store_id": sid, "products": len(products)})
    return {
        "store": to_out(StoreSummaryOut, store),
        "products": to_out_list(StorefrontProductOut, products),
        "categories": [
            {
                "id": c.id,
                "name": c.name,
                "description": c.description,
                "image": c.image,
                "products": [
                    to_out(ProductSummaryOut, link.product)
                    for link in c.product_links
                    if not link.product.hide_from_homepage
                ],
            }
            for c in categories
        ],
        "brands": to_out_list(BrandOut, brands),
        "shipping": shipping,
        "shippingMethods": methods,
        "settings": settings,
        "location": location,
    }
