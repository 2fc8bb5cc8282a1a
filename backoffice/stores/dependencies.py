from fastapi import Depends, Path

from backoffice.auth.dependencies import current_user
from backoffice.common.custom_exceptions import ForbiddenError
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Store, Users
from backoffice.stores.constants import logger
from backoffice.stores.repository import store_by_id


async def owned_store(store_id: int = Path(..., ge=1), user: Users = Depends(current_user),
                      session=Depends(get_session)) -> Store:
    """Tenant guard for /{store_id}/... routes: the caller must own the store."""
    store = await store_by_id(session, store_id)
    if store is None or store.user_id != user.id:
        logger.warning("store.access_denied", extra={"store_id": store_id, "user_id": user.id})
        raise ForbiddenError("Access denied. Store not found or you don't have permission.")
    return store
