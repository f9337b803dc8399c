import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brincapark import __version__
from brincapark.api.errors import register_exception_handlers
from brincapark.api.routers.admin import router as admin_router
from brincapark.api.routers.config import router as config_router
from brincapark.api.routers.health import router as health_router
from brincapark.api.routers.reservations import router as reservations_router
from brincapark.config import Settings, get_settings
from brincapark.infrastructure.db.engine import Store

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Without a reachable store the process must not start serving
        store = Store.from_settings(settings)
        try:
            await store.connect()
        except Exception:
            logger.critical("Could not connect to the database, aborting startup", exc_info=True)
            await store.dispose()
            raise
        app.state.store = store
        yield
        await store.dispose()

    app = FastAPI(
        title="BRINCAPARK Reservations API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(reservations_router, prefix="/api/reservations", tags=["Reservations"])
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])
    app.include_router(config_router, prefix="/api/config", tags=["Config"])
    return app


app = create_app()
