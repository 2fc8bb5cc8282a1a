from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.dependencies import current_user
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import success_response
from backoffice.db.dependencies import get_session, get_session_factory
from backoffice.schema.full_schema import Users
from backoffice.stores.constants import logger
from backoffice.stores.models import (ShippingConfigOut, ShippingIn, ShippingMethodOut, StoreOut,
                                      StoreSettingsIn, StoreSettingsOut, StoreUpdateIn)
from backoffice.stores.services import (get_my_store, get_shipping, launch_store, save_settings,
                                        save_shipping, setup_store, update_store)
from backoffice.stores.storefront import get_storefront
from backoffice.stores.repository import settings_for

store_router = APIRouter()


def _shipping_out(shipping: dict) -> dict:
    config = shipping["config"]
    return {
        "config": to_out(ShippingConfigOut, config) if config else None,
        "methods": to_out_list(ShippingMethodOut, shipping["methods"]),
    }


@store_router.post("/setup", status_code=status.HTTP_201_CREATED)
async def setup(business_name: Optional[str] = Form(None, alias="businessName"),
                store_url: Optional[str] = Form(None, alias="storeUrl"),
                country: Optional[str] = Form(None),
                currency: Optional[str] = Form(None),
                logo: Optional[UploadFile] = File(None),
                user: Users = Depends(current_user),
                session: AsyncSession = Depends(get_session)):

    logger.info("store.setup.attempt", extra={"user_id": user.id, "store_url": store_url})
    store = await setup_store(session, user, business_name, store_url, country, currency, logo)
    return success_response({"message": "Store created successfully", "store": to_out(StoreOut, store)},
                            status_code=status.HTTP_201_CREATED)


@store_router.get("")
async def get_store(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    store = await get_my_store(session, user.id)
    return success_response({"store": to_out(StoreOut, store)})


@store_router.put("")
async def put_store(payload: StoreUpdateIn, user: Users = Depends(current_user),
                    session: AsyncSession = Depends(get_session)):
    store = await update_store(session, user.id, payload)
    return success_response({"message": "Store updated successfully", "store": to_out(StoreOut, store)})


@store_router.post("/logo")
async def put_store_logo(logo: UploadFile = File(...), user: Users = Depends(current_user),
                         session: AsyncSession = Depends(get_session)):
    store = await update_store(session, user.id, StoreUpdateIn(), logo)
    return success_response({"store": to_out(StoreOut, store)})


@store_router.post("/launch")
async def launch(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    store = await launch_store(session, user.id)
    return success_response({"message": "Store launched successfully", "store": to_out(StoreOut, store)})


@store_router.get("/shipping")
async def read_shipping(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    store = await get_my_store(session, user.id)
    return success_response(_shipping_out(await get_shipping(session, store)))


@store_router.put("/shipping")
async def write_shipping(payload: ShippingIn, user: Users = Depends(current_user),
                         session: AsyncSession = Depends(get_session)):
    store = await get_my_store(session, user.id)
    return success_response(_shipping_out(await save_shipping(session, store, payload)))


@store_router.get("/settings")
async def read_settings(user: Users = Depends(current_user), session: AsyncSession = Depends(get_session)):
    store = await get_my_store(session, user.id)
    settings = await settings_for(session, store.id)
    return success_response({"settings": to_out(StoreSettingsOut, settings) if settings else None})


@store_router.put("/settings")
async def write_settings(payload: StoreSettingsIn, user: Users = Depends(current_user),
                         session: AsyncSession = Depends(get_session)):
    store = await get_my_store(session, user.id)
    settings = await save_settings(session, store, payload)
    return success_response({"settings": to_out(StoreSettingsOut, settings)})


@store_router.get("/storefront/{store_url}")
async def storefront(store_url: str, session: AsyncSession = Depends(get_session),
                     session_maker=Depends(get_session_factory)):
    return success_response(await get_storefront(session, session_maker, store_url))
