from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from myauth.config import Config
from myauth.core.db import Base

if TYPE_CHECKING:
    from myauth.core.modules.access.service import AccessService
    from myauth.core.modules.session.service import SessionService
    from myauth.core.modules.user.service import UserService

# The user upsert relies on INSERT ... ON CONFLICT, which only these dialects provide
SUPPORTED_BACKENDS = ("postgresql", "sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    """SQLite ignores FOREIGN KEY clauses unless enabled per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Service:
    """Base class for services with direct database access."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    user: UserService
    session: SessionService
    access: AccessService

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for startup - user bootstraps the first admin
        service_configs = [
            ("user", "myauth.core.modules.user.service", "UserService"),
            ("session", "myauth.core.modules.session.service", "SessionService"),
            ("access", "myauth.core.modules.access.service", "AccessService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(session_factory)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database engine, and all service instances."""

    config: Config
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    services: Services

    def __init__(self, config: Config) -> None:
        """Initialize core with config, the SQLAlchemy engine, and auto-register services."""
        self.config = config
        backend = make_url(config.database_url).get_backend_name()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported database backend '{backend}', expected one of: {', '.join(SUPPORTED_BACKENDS)}")
        self.engine = create_async_engine(config.database_url, pool_pre_ping=True)
        if backend == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        self.services = Services(self.session_factory)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def create_tables(self) -> None:
        """Create the user and user_sessions tables if they do not exist."""
        # Table classes register on Base.metadata when their modules are imported
        importlib.import_module("myauth.core.modules.user.models")
        importlib.import_module("myauth.core.modules.session.models")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def on_start(self) -> None:
        await self.create_tables()
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and release pooled connections on shutdown."""
        await self.services.stop_all()
        await self.engine.dispose()
