from typing import Optional

from sqlalchemy import func, select

from backoffice.common.custom_exceptions import NotFoundError
from backoffice.common.logging_setup import get_logger
from backoffice.common.utils import now
from backoffice.schema.full_schema import Product, ProductCategory, Stock
from backoffice.stocks.models import StockOut, StockProductOut
from backoffice.warehouses.models import WarehouseRefOut

logger = get_logger("backoffice.stocks")

EXPORT_FIELDS = ("id", "productId", "product", "warehouseId", "warehouse", "quantity", "categories", "updatedAt")


def stock_out(stock: Stock) -> dict:
    product = stock.product
    return StockOut(
        id=stock.id,
        store_id=stock.store_id,
        product_id=stock.product_id,
        warehouse_id=stock.warehouse_id,
        quantity=stock.quantity,
        product=StockProductOut(id=product.id, name=product.name, product_images=product.product_images or [],
                                categories=[link.category.name for link in product.category_links]),
        warehouse=WarehouseRefOut.model_validate(stock.warehouse),
        updated_at=stock.updated_at,
    ).model_dump(by_alias=True, mode="json")


def _filters(store_id: int, search: Optional[str], warehouse_id: Optional[int], category_id: Optional[int]) -> list:
    filters = [Stock.store_id == store_id]
    if warehouse_id is not None:
        filters.append(Stock.warehouse_id == warehouse_id)
    if search and search.strip():
        filters.append(Stock.product_id.in_(
            select(Product.id).where(Product.store_id == store_id, Product.name.ilike(f"%{search.strip()}%"))))
    if category_id is not None:
        filters.append(Stock.product_id.in_(
            select(ProductCategory.product_id).where(ProductCategory.category_id == category_id)))
    return filters


async def list_stocks(session, store_id: int, page: int, page_size: int, search: Optional[str] = None,
                      warehouse_id: Optional[int] = None, category_id: Optional[int] = None):
    filters = _filters(store_id, search, warehouse_id, category_id)
    total = (await session.execute(select(func.count(Stock.id)).where(*filters))).scalar_one()
    stmt = (select(Stock).where(*filters).order_by(Stock.updated_at.desc(), Stock.id.desc())
            .offset((page - 1) * page_size).limit(page_size))
    return (await session.execute(stmt)).scalars().all(), total


async def list_all_stocks(session, store_id: int):
    stmt = select(Stock).where(Stock.store_id == store_id).order_by(Stock.updated_at.desc(), Stock.id.desc())
    return (await session.execute(stmt)).scalars().all()


async def stocks_for_product(session, store_id: int, product_id: int):
    stmt = (select(Stock).where(Stock.store_id == store_id, Stock.product_id == product_id)
            .order_by(Stock.warehouse_id.asc()))
    return (await session.execute(stmt)).scalars().all()


async def stock_at(session, store_id: int, product_id: int, warehouse_id: int) -> Optional[Stock]:
    stmt = select(Stock).where(Stock.store_id == store_id, Stock.product_id == product_id,
                               Stock.warehouse_id == warehouse_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def get_stock_at(session, store_id: int, product_id: int, warehouse_id: int) -> Stock:
    stock = await stock_at(session, store_id, product_id, warehouse_id)
    if stock is None:
        raise NotFoundError("Stock not found")
    return stock


async def apply_change(session, store_id: int, product_id: int, warehouse_id: int, change: int) -> int:
    """Move the on-hand quantity by `change`, never below zero.

    Returns the change actually applied. A decrease against a missing row is a no-op.
    Does not commit; callers own the unit of work.
    """
    stock = await stock_at(session, store_id, product_id, warehouse_id)
    if stock is None:
        if change <= 0:
            return 0
        session.add(Stock(store_id=store_id, product_id=product_id, warehouse_id=warehouse_id, quantity=change))
        return change

    before = stock.quantity
    stock.quantity = max(0, before + change)
    stock.updated_at = now()
    logger.debug("stock.changed", extra={"stock_id": stock.id, "before": before, "after": stock.quantity})
    return stock.quantity - before


async def export_rows(session, store_id: int) -> list:
    rows = []
    for s in await list_all_stocks(session, store_id):
        rows.append({
            "id": s.id,
            "productId": s.product_id,
            "product": s.product.name,
            "warehouseId": s.warehouse_id,
            "warehouse": s.warehouse.name,
            "quantity": s.quantity,
            "categories": ", ".join(link.category.name for link in s.product.category_links),
            "updatedAt": s.updated_at,
        })
    return rows
