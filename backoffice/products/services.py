from typing import Iterable, List, Optional

from sqlalchemy import delete, desc, asc, func, or_, select

from backoffice.common.custom_exceptions import BadRequestError, ConflictError, NotFoundError
from backoffice.common.utils import now
from backoffice.products.constants import CHILD_RELATIONS, SORT_HIGHEST, SORT_LOWEST, logger
from backoffice.products.models import CategoryRefOut, ProductCreateIn, ProductOut, ProductUpdateIn
from backoffice.schema.full_schema import (Category, Product, ProductCategory, ProductCrossSell,
                                           ProductDescriptionDetail, ProductOption, ProductPricing,
                                           ProductUpsell, Stock, StockAdjustment)

_LIST_FIELDS = ("product_images", "discovery_categories")
_NON_NULLABLE = ("name", "stock_quantity", "type", "hide_from_homepage", "is_pre_order",
                 "show_striked_out_original_price", "auto_redirect_after_purchase")


def product_out(product: Product) -> dict:
    out = ProductOut.model_validate(product, from_attributes=True)
    out = out.model_copy(update={
        "categories": [CategoryRefOut(id=link.category.id, name=link.category.name)
                       for link in product.category_links],
        "upsell_product_ids": [u.upsell_product_id for u in product.upsell_products],
        "cross_sell_product_ids": [c.cross_sell_product_id for c in product.cross_sell_products],
    })
    return out.model_dump(by_alias=True, mode="json")


# ---------------------------------------------------------------------------------------------
# validation

async def validate_category_ids(session, store_id: int, category_ids: Iterable[int]) -> List[int]:
    ids = sorted(set(category_ids))
    if not ids:
        return ids
    stmt = select(func.count(Category.id)).where(Category.id.in_(ids), Category.store_id == store_id)
    found = (await session.execute(stmt)).scalar_one()
    if found != len(ids):
        logger.warning("product.category.invalid_ids", extra={"store_id": store_id, "provided": ids, "found": found})
        raise BadRequestError("One or more category IDs do not exist or do not belong to this store")
    return ids


async def validate_linked_product_ids(session, store_id: int, product_ids: Iterable[int],
                                      self_id: Optional[int] = None) -> List[int]:
    ids = sorted(set(product_ids))
    if not ids:
        return ids
    if self_id is not None and self_id in ids:
        raise BadRequestError("A product cannot be linked to itself")
    stmt = select(func.count(Product.id)).where(Product.id.in_(ids), Product.store_id == store_id)
    found = (await session.execute(stmt)).scalar_one()
    if found != len(ids):
        raise BadRequestError("One or more linked product IDs do not exist or do not belong to this store")
    return ids


def check_unique_currencies(pricings) -> None:
    codes = [p.currency_code for p in pricings]
    if len(codes) != len(set(codes)):
        raise ConflictError("Duplicate pricing currency in payload")


async def is_custom_url_taken(session, store_id: int, custom_url: str, exclude_product_id: Optional[int] = None) -> bool:
    stmt = select(Product.id).where(Product.store_id == store_id,
                                    func.lower(Product.custom_product_url) == custom_url.strip().lower())
    if exclude_product_id is not None:
        stmt = stmt.where(Product.id != exclude_product_id)
    return (await session.execute(stmt.limit(1))).scalar_one_or_none() is not None


async def _validate_payload(session, store_id: int, payload, product_id: Optional[int] = None) -> dict:
    """Run every check before anything is written; returns the normalized child id lists."""
    fields = payload.model_fields_set
    resolved = {}
    if "pricings" in fields and payload.pricings is not None:
        check_unique_currencies(payload.pricings)
    if "categories" in fields:
        resolved["categories"] = await validate_category_ids(session, store_id, payload.categories or [])
    if "upsell_product_ids" in fields:
        resolved["upsell_product_ids"] = await validate_linked_product_ids(
            session, store_id, payload.upsell_product_ids or [], product_id)
    if "cross_sell_product_ids" in fields:
        resolved["cross_sell_product_ids"] = await validate_linked_product_ids(
            session, store_id, payload.cross_sell_product_ids or [], product_id)
    if payload.custom_product_url and await is_custom_url_taken(session, store_id, payload.custom_product_url,
                                                                 product_id):
        raise ConflictError("Custom product URL already taken")
    return resolved


# ---------------------------------------------------------------------------------------------
# child relations

async def _replace_children(session, product_id: int, payload, resolved: dict) -> None:
    fields = payload.model_fields_set

    if "pricings" in fields:
        await session.execute(delete(ProductPricing).where(ProductPricing.product_id == product_id))
        session.add_all([ProductPricing(product_id=product_id, **p.model_dump()) for p in payload.pricings or []])

    if "description_details" in fields:
        await session.execute(delete(ProductDescriptionDetail).where(ProductDescriptionDetail.product_id == product_id))
        session.add_all([ProductDescriptionDetail(product_id=product_id, **d.model_dump())
                         for d in payload.description_details or []])

    if "options" in fields:
        await session.execute(delete(ProductOption).where(ProductOption.product_id == product_id))
        session.add_all([ProductOption(product_id=product_id, **o.model_dump()) for o in payload.options or []])

    if "categories" in resolved:
        await session.execute(delete(ProductCategory).where(ProductCategory.product_id == product_id))
        session.add_all([ProductCategory(product_id=product_id, category_id=cid) for cid in resolved["categories"]])

    if "upsell_product_ids" in resolved:
        await session.execute(delete(ProductUpsell).where(ProductUpsell.product_id == product_id))
        session.add_all([ProductUpsell(product_id=product_id, upsell_product_id=pid)
                         for pid in resolved["upsell_product_ids"]])

    if "cross_sell_product_ids" in resolved:
        await session.execute(delete(ProductCrossSell).where(ProductCrossSell.product_id == product_id))
        session.add_all([ProductCrossSell(product_id=product_id, cross_sell_product_id=pid)
                         for pid in resolved["cross_sell_product_ids"]])


def _scalar_values(payload) -> dict:
    values = payload.model_dump(exclude_unset=True, exclude=set(CHILD_RELATIONS))
    for key in list(values):
        if values[key] is None:
            if key in _LIST_FIELDS:
                values[key] = []
            elif key in _NON_NULLABLE:
                values.pop(key)
    if "name" in values:
        values["name"] = values["name"].strip()
        if not values["name"]:
            raise BadRequestError("Product name is required")
    return values


# ---------------------------------------------------------------------------------------------
# operations

async def create_product(session, store_id: int, payload: ProductCreateIn) -> Product:
    # explicit defaults count as set so every child relation is written on create
    payload = payload.model_copy()
    payload.model_fields_set.update(CHILD_RELATIONS)
    resolved = await _validate_payload(session, store_id, payload)

    product = Product(store_id=store_id, **_scalar_values(payload))
    session.add(product)
    await session.flush()

    await _replace_children(session, product.id, payload, resolved)
    await session.commit()

    logger.info("product.create.success", extra={"store_id": store_id, "product_id": product.id})
    return await get_product(session, store_id, product.id)


async def get_product(session, store_id: int, product_id: int) -> Product:
    stmt = (select(Product).where(Product.id == product_id, Product.store_id == store_id)
            .execution_options(populate_existing=True))
    product = (await session.execute(stmt)).scalar_one_or_none()
    if product is None:
        logger.warning("product.not_found", extra={"store_id": store_id, "product_id": product_id})
        raise NotFoundError("Product not found or access denied")
    return product


async def update_product(session, store_id: int, product_id: int, payload: ProductUpdateIn) -> Product:
    product = await get_product(session, store_id, product_id)
    resolved = await _validate_payload(session, store_id, payload, product.id)

    for field, value in _scalar_values(payload).items():
        setattr(product, field, value)
    product.updated_at = now()

    # all replacements share one commit, a failure leaves the stored product untouched
    await _replace_children(session, product.id, payload, resolved)
    await session.commit()

    logger.info("product.update.success", extra={"product_id": product_id,
                                                 "fields": sorted(payload.model_fields_set)})
    return await get_product(session, store_id, product_id)


async def delete_product(session, store_id: int, product_id: int) -> None:
    product = await get_product(session, store_id, product_id)
    pid = product.id
    await session.execute(delete(ProductCategory).where(ProductCategory.product_id == pid))
    await session.execute(delete(ProductUpsell).where(
        or_(ProductUpsell.product_id == pid, ProductUpsell.upsell_product_id == pid)))
    await session.execute(delete(ProductCrossSell).where(
        or_(ProductCrossSell.product_id == pid, ProductCrossSell.cross_sell_product_id == pid)))
    await session.execute(delete(ProductPricing).where(ProductPricing.product_id == pid))
    await session.execute(delete(ProductDescriptionDetail).where(ProductDescriptionDetail.product_id == pid))
    await session.execute(delete(ProductOption).where(ProductOption.product_id == pid))
    await session.execute(delete(StockAdjustment).where(StockAdjustment.product_id == pid))
    await session.execute(delete(Stock).where(Stock.product_id == pid))
    await session.execute(delete(Product).where(Product.id == pid))
    await session.commit()
    logger.info("product.delete.success", extra={"store_id": store_id, "product_id": pid})


def _list_filters(store_id: int, product_name: Optional[str], category_id: Optional[int]) -> list:
    filters = [Product.store_id == store_id]
    if product_name:
        filters.append(Product.name.ilike(f"%{product_name.strip()}%"))
    if category_id is not None:
        filters.append(Product.id.in_(
            select(ProductCategory.product_id).where(ProductCategory.category_id == category_id)))
    return filters


async def list_products(session, store_id: int, page: int, page_size: int, product_name: Optional[str] = None,
                        category_id: Optional[int] = None, sort_by_price: Optional[str] = None):
    filters = _list_filters(store_id, product_name, category_id)
    total = (await session.execute(select(func.count(Product.id)).where(*filters))).scalar_one()

    stmt = select(Product).where(*filters)
    if sort_by_price in (SORT_HIGHEST, SORT_LOWEST):
        # a product is ranked by its highest selling price across currencies
        max_price = (select(ProductPricing.product_id, func.max(ProductPricing.selling_price).label("max_price"))
                     .group_by(ProductPricing.product_id).subquery())
        price = func.coalesce(max_price.c.max_price, 0)
        direction = desc if sort_by_price == SORT_HIGHEST else asc
        stmt = (stmt.outerjoin(max_price, max_price.c.product_id == Product.id)
                .order_by(direction(price), direction(Product.id)))
    else:
        stmt = stmt.order_by(Product.created_at.desc(), Product.id.desc())

    items = (await session.execute(stmt.offset((page - 1) * page_size).limit(page_size))).scalars().all()
    return items, total


async def export_rows(session, store_id: int) -> list:
    stmt = select(Product).where(Product.store_id == store_id).order_by(Product.created_at.desc(), Product.id.desc())
    rows = []
    for p in (await session.execute(stmt)).scalars().all():
        rows.append({
            "id": p.id,
            "name": p.name,
            "type": p.type,
            "stockQuantity": p.stock_quantity,
            "unit": p.unit,
            "barcode": p.barcode,
            "customProductUrl": p.custom_product_url,
            "categories": ", ".join(link.category.name for link in p.category_links),
            "prices": "; ".join(f"{pr.currency_code} {pr.selling_price:g}" for pr in p.pricings),
            "hideFromHomepage": p.hide_from_homepage,
            "isPreOrder": p.is_pre_order,
            "createdAt": p.created_at,
        })
    return rows
