"""
SQLAlchemy ORM models for the File Service.
"""

from fileservice.models.asset import Asset
from fileservice.models.access import AccessAction, AccessLogEntry

__all__ = [
    "Asset",
    "AccessAction",
    "AccessLogEntry",
]
