"""
Pydantic schemas for request/response validation.
"""

from fileservice.schemas.asset import (
    AssetSummary,
    AssetResponse,
    asset_summary,
    asset_response,
)
from fileservice.schemas.result import Result, ListResult
from fileservice.schemas.error import ErrorResponse

__all__ = [
    # Asset schemas
    "AssetSummary",
    "AssetResponse",
    "asset_summary",
    "asset_response",
    # Result envelopes
    "Result",
    "ListResult",
    # Error schemas
    "ErrorResponse",
]
