from typing import Any, Dict
from sqlalchemy.pool import StaticPool


def _normalize_db_url(url: str | None) -> str | None:
    # hosted postgres often hands out "postgres://..." and asyncpg needs "postgresql+asyncpg://..."
    if not url:
        return None
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def engine_options(url: str) -> Dict[str, Any]:
    if not is_sqlite(url):
        return {"pool_pre_ping": True}
    opts: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.endswith("://"):
        # one shared connection, otherwise every checkout sees an empty database
        opts["poolclass"] = StaticPool
    return opts
