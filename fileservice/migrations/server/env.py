"""Alembic environment for the server schema."""

from fileservice.db.base import ServerBase
from fileservice.db.migrations import run_migrations_env
from fileservice.models import access  # noqa: F401

run_migrations_env(ServerBase.metadata, version_table="alembic_version_server")
