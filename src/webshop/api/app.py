"""
webshop.api.app

FastAPI app factory for the web shop service.

Responsibilities:
- Build the FastAPI application and register middleware and routers.
- Initialize and dispose shared infrastructure (DB engine, session factory, dispatcher).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from webshop import __version__
from webshop.api.routers.health import router as health_router
from webshop.api.routers.shop import router as shop_router
from webshop.auth.passwords import PasswordHasher
from webshop.db.init_db import check_connectivity, init_db
from webshop.db.repositories.unit_of_work import sql_unit_of_work
from webshop.db.seed import load_seed_file, seed_users
from webshop.db.session import create_engine, create_sessionmaker
from webshop.observability.logging import configure_logging, get_logger
from webshop.observability.middleware import RequestContextMiddleware
from webshop.routing.dispatcher import Dispatcher
from webshop.routing.static import StaticAssetServer
from webshop.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        try:
            # Unreachable storage at boot is fatal; let it propagate.
            await check_connectivity(engine)
            if settings.env in ("dev", "test"):
                await init_db(engine)

            sessionmaker = create_sessionmaker(engine)
            hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
            if settings.seed_users_file is not None:
                await seed_users(
                    sessionmaker, load_seed_file(settings.seed_users_file), hasher=hasher
                )

            app.state.engine = engine
            app.state.sessionmaker = sessionmaker
            app.state.dispatcher = Dispatcher(
                unit_of_work=sql_unit_of_work(sessionmaker),
                hasher=hasher,
                static=StaticAssetServer(settings.public_dir),
                body_read_timeout_s=settings.body_read_timeout_s,
            )
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    # Docs/OpenAPI stay off: every non-/api GET path belongs to the static assets.
    app = FastAPI(
        title="Web Shop",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    # Must stay last: it matches every path.
    app.include_router(shop_router)

    return app
