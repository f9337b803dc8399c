"""Store handle: engine plus session factory, owned by the app lifespan."""

import logging

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from brincapark.config import Settings
from brincapark.infrastructure.db.repositories.config_repo_sql import ensure_configuration_row
from brincapark.infrastructure.db.tables import metadata

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is required")
    url = settings.database_url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"timeout": settings.sqlite_busy_timeout_seconds}}
        if ":memory:" in url or url.endswith("://"):
            # A single shared connection, otherwise every checkout sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_async_engine(url, echo=settings.sql_echo, **kwargs)
    return create_async_engine(
        url,
        echo=settings.sql_echo,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Store:
    """Conexión explícita al almacén: se abre al arrancar y se libera al apagar."""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.sessionmaker = build_sessionmaker(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        return cls(build_engine(settings))

    async def connect(self) -> None:
        """Verifica la conexión, crea las tablas que falten y siembra la configuración."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(metadata.create_all)
        try:
            async with self.engine.begin() as conn:
                seeded = await ensure_configuration_row(conn)
        except IntegrityError:
            # Another instance seeded the row between our check and insert
            seeded = False
        logger.info(
            "Store connected",
            extra={
                "backend": self.engine.url.get_backend_name(),
                "database": self.engine.url.database,
                "configuration_seeded": seeded,
            },
        )

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Store disposed")
