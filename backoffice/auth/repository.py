from typing import Optional
from sqlalchemy import select
from backoffice.schema.full_schema import Users


async def user_by_email(session, email: str) -> Optional[Users]:
    res = await session.execute(select(Users).where(Users.email == email))
    return res.scalar_one_or_none()


async def user_by_id(session, user_id: int) -> Optional[Users]:
    return await session.get(Users, user_id)


async def username_taken(session, username: str) -> bool:
    res = await session.execute(select(Users.id).where(Users.username == username))
    return res.scalar_one_or_none() is not None
