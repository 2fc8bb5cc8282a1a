from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession
from backoffice.db.connection import async_session


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    # the session is closed (and any open transaction rolled back) when the request ends
    async with async_session() as session:
        yield session


async def get_session_factory():
    yield async_session
