"""Database module for the File Service."""

from fileservice.db.base import ContentBase, ServerBase
from fileservice.db.backends import DatabaseBackend, get_database_backend
from fileservice.db.session import Database, create_database, get_database, get_db

__all__ = [
    "ContentBase",
    "ServerBase",
    "DatabaseBackend",
    "get_database_backend",
    "Database",
    "create_database",
    "get_database",
    "get_db",
]
