from fastapi import Depends, Path

from backoffice.auth import CUSTOMER_SCOPE
from backoffice.auth.dependencies import Authentication
from backoffice.auth.utils import claim_id
from backoffice.common.custom_exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from backoffice.customers.repository import customer_by_id
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Customer, Store
from backoffice.stores.repository import store_by_url

customer_auth = Authentication(CUSTOMER_SCOPE)


async def storefront_store(store_url: str = Path(...), session=Depends(get_session)) -> Store:
    store = await store_by_url(session, store_url)
    if store is None:
        raise NotFoundError("Store not found")
    return store


async def current_customer(store: Store = Depends(storefront_store), claims: dict = Depends(customer_auth),
                           session=Depends(get_session)) -> Customer:
    if claims.get("storeId") != store.id:
        raise ForbiddenError("Token does not belong to this store")
    customer = await customer_by_id(session, store.id, claim_id(claims))
    if customer is None:
        raise UnauthorizedError("Customer not found")
    return customer
