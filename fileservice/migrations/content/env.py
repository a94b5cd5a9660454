"""Alembic environment for the content schema."""

from fileservice.db.base import ContentBase
from fileservice.db.migrations import run_migrations_env
from fileservice.models import asset  # noqa: F401

run_migrations_env(ContentBase.metadata, version_table="alembic_version_content")
