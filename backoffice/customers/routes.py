from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.auth.models import EmailCodeIn, EmailIn, LoginIn, RefreshIn, ResetPasswordIn
from backoffice.common.csv_export import csv_response
from backoffice.common.dependencies import Pagination
from backoffice.common.models import to_out, to_out_list
from backoffice.common.utils import paginated, success_response
from backoffice.customers import auth_services
from backoffice.customers.dependencies import current_customer, storefront_store
from backoffice.customers.models import CustomerCreateIn, CustomerOut, CustomerProfileIn, CustomerRegisterIn, \
    CustomerUpdateIn
from backoffice.customers.services import (EXPORT_FIELDS, create_customer, customer_stats, delete_customer,
                                           export_rows, get_customer, list_customers, update_customer,
                                           update_customer_profile)
from backoffice.db.dependencies import get_session
from backoffice.schema.full_schema import Customer, Store
from backoffice.stores.dependencies import owned_store

customers_router = APIRouter()
storefront_customer_router = APIRouter()


# ---------------------------------------------------------------------------------------------
# back-office

@customers_router.post("/{store_id}", status_code=status.HTTP_201_CREATED)
async def create(payload: CustomerCreateIn, store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    customer = await create_customer(session, store, payload)
    return success_response({"message": "Customer created successfully", "customer": to_out(CustomerOut, customer)},
                            status_code=status.HTTP_201_CREATED)


@customers_router.get("/{store_id}")
async def list_all(search: Optional[str] = Query(None),
                   customer_group_id: Optional[int] = Query(None, alias="customerGroupId", ge=1),
                   pagination: Pagination = Depends(), store: Store = Depends(owned_store),
                   session: AsyncSession = Depends(get_session)):
    items, total = await list_customers(session, store.id, pagination.page, pagination.page_size, search,
                                        customer_group_id)
    return success_response(paginated(to_out_list(CustomerOut, items), total, pagination.page, pagination.page_size))


@customers_router.get("/{store_id}/stats")
async def stats(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return success_response(await customer_stats(session, store.id))


@customers_router.get("/{store_id}/export")
async def export(store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    return csv_response(f"customers-{store.id}.csv", EXPORT_FIELDS, await export_rows(session, store.id))


@customers_router.get("/{store_id}/{customer_id}")
async def get_one(customer_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                  session: AsyncSession = Depends(get_session)):
    return success_response({"customer": to_out(CustomerOut, await get_customer(session, store.id, customer_id))})


@customers_router.put("/{store_id}/{customer_id}")
async def update(payload: CustomerUpdateIn, customer_id: int = Path(..., ge=1),
                 store: Store = Depends(owned_store), session: AsyncSession = Depends(get_session)):
    customer = await update_customer(session, store.id, customer_id, payload)
    return success_response({"message": "Customer updated successfully", "customer": to_out(CustomerOut, customer)})


@customers_router.delete("/{store_id}/{customer_id}")
async def delete(customer_id: int = Path(..., ge=1), store: Store = Depends(owned_store),
                 session: AsyncSession = Depends(get_session)):
    await delete_customer(session, store.id, customer_id)
    return success_response({"message": "Customer deleted successfully"})


# ---------------------------------------------------------------------------------------------
# storefront shopper accounts

@storefront_customer_router.post("/{store_url}/auth/register", status_code=status.HTTP_201_CREATED)
async def register(payload: CustomerRegisterIn, store: Store = Depends(storefront_store),
                   session: AsyncSession = Depends(get_session)):
    customer = await auth_services.register_customer(session, store, payload)
    return success_response(
        {"message": "Registration successful. Please check your email for the verification code.",
         "customerId": customer.id},
        status_code=status.HTTP_201_CREATED,
    )


@storefront_customer_router.post("/{store_url}/auth/verify-email")
async def verify_email(payload: EmailCodeIn, store: Store = Depends(storefront_store),
                       session: AsyncSession = Depends(get_session)):
    result = await auth_services.verify_customer_email(session, store, payload.email, payload.code)
    return success_response({"message": "Email verified successfully", **result})


@storefront_customer_router.post("/{store_url}/auth/resend-verification")
async def resend_verification(payload: EmailIn, store: Store = Depends(storefront_store),
                              session: AsyncSession = Depends(get_session)):
    await auth_services.resend_customer_verification(session, store, payload.email)
    return success_response({"message": "Verification code sent"})


@storefront_customer_router.post("/{store_url}/auth/login")
async def login(payload: LoginIn, store: Store = Depends(storefront_store),
                session: AsyncSession = Depends(get_session)):
    result = await auth_services.login_customer(session, store, payload.email, payload.password)
    return success_response({"message": "Login successful", **result})


@storefront_customer_router.post("/{store_url}/auth/refresh-token")
async def refresh(payload: RefreshIn, store: Store = Depends(storefront_store),
                  session: AsyncSession = Depends(get_session)):
    access = await auth_services.refresh_customer_token(session, store, payload.refresh_token)
    return success_response({"accessToken": access})


@storefront_customer_router.post("/{store_url}/auth/forgot-password")
async def forgot_password(payload: EmailIn, store: Store = Depends(storefront_store),
                          session: AsyncSession = Depends(get_session)):
    await auth_services.forgot_customer_password(session, store, payload.email)
    return success_response({"message": "Password reset code sent"})


@storefront_customer_router.post("/{store_url}/auth/verify-reset-code")
async def verify_reset_code(payload: EmailCodeIn, store: Store = Depends(storefront_store),
                            session: AsyncSession = Depends(get_session)):
    await auth_services.verify_customer_reset_code(session, store, payload.email, payload.code)
    return success_response({"message": "Reset code is valid"})


@storefront_customer_router.post("/{store_url}/auth/reset-password")
async def reset_password(payload: ResetPasswordIn, store: Store = Depends(storefront_store),
                         session: AsyncSession = Depends(get_session)):
    await auth_services.reset_customer_password(session, store, payload.email, payload.code, payload.new_password)
    return success_response({"message": "Password reset successful"})


@storefront_customer_router.post("/{store_url}/auth/logout")
async def logout(customer: Customer = Depends(current_customer), session: AsyncSession = Depends(get_session)):
    await auth_services.logout_customer(session, customer)
    return success_response({"message": "Logged out successfully"})


@storefront_customer_router.get("/{store_url}/customer/profile")
async def read_profile(customer: Customer = Depends(current_customer)):
    return success_response({"customer": to_out(CustomerOut, customer)})


@storefront_customer_router.put("/{store_url}/customer/profile")
async def write_profile(payload: CustomerProfileIn, customer: Customer = Depends(current_customer),
                        session: AsyncSession = Depends(get_session)):
    customer = await update_customer_profile(session, customer, payload)
    return success_response({"message": "Profile updated successfully", "customer": to_out(CustomerOut, customer)})
