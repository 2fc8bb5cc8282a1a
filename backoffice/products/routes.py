from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.utils import paginated, success_response
from backoffice.db.dependencies import get_session
from backoffice.products.constants import EXPORT_FIELDS, SORT_HIGHEST, SORT_LOWEST, logger
from backoffice.products.models import ProductCreateIn, ProductUpdateIn, ValidateUrlIn
from backoffice.products.services import (create_product, delete_product, export_rows, get_product,
                                          is_custom_url_taken, list_products, product_out, update_product)
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store

products_router = APIRouter()

@products_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: ProductCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    logger.info("product.create.attempt", extra={"store_id": store.id})
    product = await create_product(session, store.id, payload)
    return success_response({"message": "Product created successfully", "product": product_out(product)},
                            status_code=status.HTTP_201_CREATED)


@products_router.get("/{store_id}")
async def list_all(product_name: Optional[str] = Query(None, alias="productName"),
                   category_id: Optional[int] = Query(None, alias="categoryId", ge=1),
                   sort_by_price: Optional[str] = Query(None, alias="sortByPrice",
                                                        pattern=f"^({SORT_HIGHEST}|{SORT_LOWEST})$"),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_products(session, store.id, pagination.page, pagination.page_size,
                                       product_name, category_id, sort_by_price)
    return success_response(paginated([product_out(p) for p in items], total, pagination.page, pagination.page_size))


@products_router.post("/{store_id}/validate-url")
async def validate_url(payload: ValidateUrlIn, store: Store = Depends(owned_store),
                       session: AsyncSession = Depends(get_session)):
    taken = await is_custom_url_taken(session, store.id, payload.custom_product_url, payload.product_id)
    return success_response({"customProductUrl": payload.custom_product_url, "isTaken": taken})


@products_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"products-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@products_router.get("/{store_id}/{product_id}")
async def get_one(product_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    product = await get_product(session, store.id, product_id)
    return success_response({"product": product_out(product)})


@products_router.put("/{store_id}/{product_id}")
async def update(payload: ProductUpdateIn, product_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    product = await update_product(session, store.id, product_id, payload)
    return success_response({"message": "Product updated successfully", "product": product_out(product)})


@products_router.delete("/{store_id}/{product_id}")
async def delete(product_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_product(session, store.id, product_id)
    return success_response({"message": "Product deleted successfully"})
