from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from backoffice.api import cur_version
from backoffice.api.routers import api_routers
from backoffice.common.custom_exceptions import register_all_exceptions
from backoffice.common.logging_setup import get_logger, setup_logging, shutdown_logging
from backoffice.common.routes import health_router
from backoffice.config.app_config import app_config
from backoffice.db.connection import async_engine
from backoffice.db.schema import create_all_tables
from backoffice.middlewares.request_id_middleware import RequestIdMiddleware

logger = get_logger("backoffice.main")


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    setup_logging()
    if app_config.AUTO_CREATE_TABLES:
        await create_all_tables(async_engine)
    logger.info("app.startup", extra={"environment": app_config.ENV, "version": cur_version})

    try:
        yield
    finally:
        # new requests are no longer accepted at this point
        await async_engine.dispose()
        logger.info("app.shutdown")
        shutdown_logging()


def create_app():
    app = FastAPI(
        title="Back-office Commerce API",
        version=cur_version,
        docs_url="/docs",
        openapi_url="/swagger.json",
        lifespan=app_lifespan)

    app.include_router(health_router, tags=["health"])
    app.include_router(api_routers)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)
    register_all_exceptions(app)

    return app

app = create_app()
