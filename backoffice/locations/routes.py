from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import success_response
from backoffice.db.dependencies import get_session
from backoffice.locations.models import LocationCreateIn, LocationUpdateIn
from backoffice.locations.services import (create_location, delete_location, get_location, list_locations,
                                           update_location)
from backoffice.schema.full_schema import Store
from backoffice.stores.dependencies import owned_store
from backoffice.stores.models import LocationOut

locations_router = APIRouter()


@locations_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: LocationCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    location = await create_location(session, store.id, payload)
    return success_response({"location": to_out(LocationOut, location)}, status_code=status.HTTP_201_CREATED)


@locations_router.get("/{store_id}")
async def list_all(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response({"items": to_out_list(LocationOut, await list_locations(session, store.id))})


@locations_router.get("/{store_id}/{location_id}")
async def get_one(location_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    location = await get_location(session, store.id, location_id)
    return success_response({"location": to_out(LocationOut, location)})


@locations_router.put("/{store_id}/{location_id}")
async def update(payload: LocationUpdateIn, location_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    location = await update_location(session, store.id, location_id, payload)
    return success_response({"location": to_out(LocationOut, location)})


@locations_router.delete("/{store_id}/{location_id}")
async def delete(location_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_location(session, store.id, location_id)
    return success_response({"message": "Location deleted successfully"})
