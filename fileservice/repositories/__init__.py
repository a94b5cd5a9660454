"""Repositories wrapping database access."""

from fileservice.repositories.asset_repository import AssetRepository

__all__ = ["AssetRepository"]
