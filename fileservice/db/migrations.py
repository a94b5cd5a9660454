"""
Schema migrations.

The service carries two alembic migration contexts, "server" and
"content", each with its own script directory and version table. At startup
MigrationRunner upgrades both to head on the configured backend, server
first, before the application accepts traffic.
"""

import asyncio
import logging
from logging.config import fileConfig

from alembic import command
from alembic.config import Config
from sqlalchemy import MetaData
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from fileservice.config import Settings, get_settings
from fileservice.core.exceptions import ConfigurationException
from fileservice.db.backends import DatabaseBackend, MigrationContext, get_database_backend

logger = logging.getLogger(__name__)

CONTEXT_ORDER = ("server", "content")


class MigrationRunner:
    """Applies pending migrations for every context of a backend."""

    def __init__(self, settings: Settings, backend: DatabaseBackend | None = None):
        self.settings = settings
        self.backend = backend or get_database_backend(settings)

    def resolve_contexts(self) -> list[MigrationContext]:
        """
        Resolve the server and content contexts, in that order.

        Raises:
            ConfigurationException: If either context is unavailable
        """
        contexts = self.backend.migration_contexts()
        resolved = []
        for name in CONTEXT_ORDER:
            context = contexts.get(name)
            if context is None or not (context.script_location / "env.py").is_file():
                raise ConfigurationException(
                    f"No {name} migration context is available",
                    details={"backend": self.backend.name},
                )
            resolved.append(context)
        return resolved

    def alembic_config(self, context: MigrationContext) -> Config:
        """Build an in-memory alembic Config for one context."""
        config = Config()
        config.set_main_option("script_location", str(context.script_location))
        config.set_main_option("version_table", context.version_table)
        url = self.backend.url().render_as_string(hide_password=False)
        config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
        return config

    async def run(self) -> None:
        """Upgrade every context to head."""
        contexts = self.resolve_contexts()
        engine = self.backend.create_engine()
        try:
            for context in contexts:
                logger.info(f"Applying {context.name} migrations ({self.backend.name})")
                async with engine.begin() as connection:
                    await connection.run_sync(self._upgrade, context)
        finally:
            await engine.dispose()
        logger.info("Database migrations complete")

    def _upgrade(self, connection: Connection, context: MigrationContext) -> None:
        config = self.alembic_config(context)
        config.attributes["connection"] = connection
        command.upgrade(config, "head")


def run_migrations_env(target_metadata: MetaData, version_table: str) -> None:
    """
    Body of a context's env.py.

    Uses the connection handed over by MigrationRunner when there is one.
    Otherwise (alembic CLI) connects with the sqlalchemy.url option or, when
    that is not set, the configured backend's URL.
    """
    from alembic import context

    config = context.config
    if config.config_file_name is not None:
        fileConfig(config.config_file_name, disable_existing_loggers=False)

    version_table = config.get_main_option("version_table", version_table)

    def _configure_and_run(connection: Connection) -> None:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            version_table=version_table,
        )
        with context.begin_transaction():
            context.run_migrations()

    connection = config.attributes.get("connection")
    if connection is not None:
        _configure_and_run(connection)
        return

    configured_url = config.get_main_option("sqlalchemy.url")
    backend = get_database_backend(get_settings())
    url = configured_url or backend.url()

    if context.is_offline_mode():
        context.configure(
            url=url,
            target_metadata=target_metadata,
            version_table=version_table,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    async def _run_online() -> None:
        if configured_url:
            engine = create_async_engine(configured_url)
        else:
            engine = backend.create_engine()
        try:
            async with engine.connect() as conn:
                await conn.run_sync(_configure_and_run)
                await conn.commit()
        finally:
            await engine.dispose()

    asyncio.run(_run_online())
