"""
Database backend adapters.

Each supported DB_TYPE maps to one DatabaseBackend which knows how to turn
the configured connection string into an SQLAlchemy URL, which engine
options to use, and which migration contexts it carries. The backend is
chosen once at startup from configuration.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from fileservice.config import DbType, Settings
from fileservice.core.exceptions import ConfigurationException

MIGRATIONS_ROOT = Path(__file__).resolve().parent.parent / "migrations"


@dataclass(frozen=True)
class MigrationContext:
    """An alembic script directory and the version table it records into."""

    name: str
    script_location: Path
    version_table: str


def parse_connection_string(value: str) -> dict[str, str]:
    """
    Parse an ADO.NET style "Key=Value;Key=Value" connection string.

    Keys are lower-cased and stripped of spaces, so "User Id" and "UserID"
    both become "userid".
    """
    parts: dict[str, str] = {}
    for segment in value.split(";"):
        if not segment.strip():
            continue
        key, sep, val = segment.partition("=")
        if not sep:
            raise ConfigurationException(
                "Malformed connection string segment",
                details={"segment": segment.strip()},
            )
        parts[key.strip().lower().replace(" ", "")] = val.strip()
    return parts


def _is_url(value: str) -> bool:
    return "://" in value.split(";", 1)[0]


def _pick(parts: dict[str, str], *keys: str) -> str | None:
    for key in keys:
        if parts.get(key):
            return parts[key]
    return None


class DatabaseBackend(ABC):
    """
    Abstract base class for database backends.

    Implementations provide the async driver name and the translation of a
    configured connection string into an SQLAlchemy URL.
    """

    db_type: DbType
    drivername: str

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def name(self) -> str:
        return self.db_type.value

    @abstractmethod
    def url_from_parts(self, parts: dict[str, str]) -> URL:
        """Build an SQLAlchemy URL from a parsed ADO.NET connection string."""
        pass

    def url(self) -> URL:
        """
        Resolve the configured CONNECTION_STRING to an SQLAlchemy URL.

        SQLAlchemy URLs are passed through unchanged. ADO.NET style strings
        are parsed and rebuilt with this backend's async driver.
        """
        connection_string = self.settings.CONNECTION_STRING.strip()
        if not connection_string:
            raise ConfigurationException("CONNECTION_STRING is empty")
        if _is_url(connection_string):
            return make_url(connection_string)
        return self.url_from_parts(parse_connection_string(connection_string))

    def engine_options(self) -> dict[str, Any]:
        return {
            "echo": self.settings.DEBUG,
            "pool_size": self.settings.DB_POOL_SIZE,
            "max_overflow": self.settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,
        }

    def create_engine(self) -> AsyncEngine:
        return create_async_engine(self.url(), **self.engine_options())

    def migration_contexts(self) -> dict[str, MigrationContext]:
        """The server and content migration contexts for this backend."""
        return {
            "server": MigrationContext(
                name="server",
                script_location=MIGRATIONS_ROOT / "server",
                version_table="alembic_version_server",
            ),
            "content": MigrationContext(
                name="content",
                script_location=MIGRATIONS_ROOT / "content",
                version_table="alembic_version_content",
            ),
        }


class PostgreSqlBackend(DatabaseBackend):
    """PostgreSQL through asyncpg."""

    db_type = DbType.POSTGRESQL
    drivername = "postgresql+asyncpg"

    def url_from_parts(self, parts: dict[str, str]) -> URL:
        port = _pick(parts, "port")
        return URL.create(
            self.drivername,
            username=_pick(parts, "username", "userid", "user", "uid"),
            password=_pick(parts, "password", "pwd"),
            host=_pick(parts, "host", "server"),
            port=int(port) if port else None,
            database=_pick(parts, "database", "initialcatalog"),
        )


class MicrosoftBackend(DatabaseBackend):
    """Microsoft SQL Server through aioodbc."""

    db_type = DbType.MICROSOFT
    drivername = "mssql+aioodbc"

    def url_from_parts(self, parts: dict[str, str]) -> URL:
        server = _pick(parts, "server", "datasource", "host", "address") or ""
        # SQL Server writes the port as "host,port"
        host, _, port = server.replace("tcp:", "").partition(",")
        port = port or _pick(parts, "port")

        query = {"driver": self.settings.MSSQL_ODBC_DRIVER}
        if parts.get("trustservercertificate", "").lower() == "true":
            query["TrustServerCertificate"] = "yes"
        if parts.get("encrypt", "").lower() in ("true", "false"):
            query["Encrypt"] = "yes" if parts["encrypt"].lower() == "true" else "no"

        return URL.create(
            self.drivername,
            username=_pick(parts, "userid", "user", "uid", "username"),
            password=_pick(parts, "password", "pwd"),
            host=host or None,
            port=int(port) if port else None,
            database=_pick(parts, "database", "initialcatalog"),
            query=query,
        )


BACKENDS: dict[DbType, type[DatabaseBackend]] = {
    DbType.MICROSOFT: MicrosoftBackend,
    DbType.POSTGRESQL: PostgreSqlBackend,
}


def get_database_backend(settings: Settings) -> DatabaseBackend:
    """
    Get the configured database backend.

    Backend selection is based on the DB_TYPE setting.

    Raises:
        ConfigurationException: If no backend is registered for DB_TYPE
    """
    backend_cls = BACKENDS.get(settings.DB_TYPE)
    if backend_cls is None:
        raise ConfigurationException(
            f"Unknown database type: {settings.DB_TYPE}",
            details={"supported": [t.value for t in BACKENDS]},
        )
    return backend_cls(settings)
