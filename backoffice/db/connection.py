from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from backoffice.config.settings import config_settings
from backoffice.db.utils import _normalize_db_url, engine_options, is_sqlite

DATABASE_URL = _normalize_db_url(config_settings.DATABASE_URL)

async_engine = create_async_engine(DATABASE_URL, echo=config_settings.DB_ECHO, **engine_options(DATABASE_URL))

async_session = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


if is_sqlite(DATABASE_URL):
    @event.listens_for(async_engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
