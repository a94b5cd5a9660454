"""Core exceptions for the File Service."""

from fileservice.core.exceptions import (
    FileServiceException,
    AssetNotFoundException,
    ValidationException,
    UnauthorizedException,
    ForbiddenException,
    PayloadTooLargeException,
    ConfigurationException,
)

__all__ = [
    "FileServiceException",
    "AssetNotFoundException",
    "ValidationException",
    "UnauthorizedException",
    "ForbiddenException",
    "PayloadTooLargeException",
    "ConfigurationException",
]
