from sqlmodel import SQLModel
from backoffice.db.connection import async_engine
import backoffice.schema.full_schema  # noqa: F401  registers every table on the metadata


async def create_all_tables(engine=async_engine):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def drop_all_tables(engine=async_engine):
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
