"""
Business logic services for the File Service.
Services handle core operations separate from API endpoints.
"""

from fileservice.services.access_service import AccessService
from fileservice.services.asset_service import AssetService

__all__ = [
    "AccessService",
    "AssetService",
]
