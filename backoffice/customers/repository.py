from typing import Optional
from sqlalchemy import select
from backoffice.schema.full_schema import Customer


async def customer_by_email(session, store_id: int, email: str) -> Optional[Customer]:
    res = await session.execute(select(Customer).where(Customer.store_id == store_id, Customer.email == email))
    return res.scalar_one_or_none()


async def customer_by_id(session, store_id: int, customer_id: int) -> Optional[Customer]:
    customer = await session.get(Customer, customer_id)
    if customer is None or customer.store_id != store_id:
        return None
    return customer
