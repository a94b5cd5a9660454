"""
Custom exceptions for the File Service.

Not-found conditions are reported as 400 client errors; business rule
violations such as a duplicate filename are not exceptions at all and are
returned as soft-error results.
"""

from typing import Any


class FileServiceException(Exception):
    """Base exception for all File Service errors."""

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to response dictionary."""
        response = {
            "error": self.error,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ValidationException(FileServiceException):
    """400 - Malformed request (negative length, missing file name)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="validation_failed",
            message=message,
            status_code=400,
            details=details,
        )


class AssetNotFoundException(FileServiceException):
    """400 - No asset matches the given id or file name."""

    def __init__(self, value: str, message: str = "File Not Found"):
        super().__init__(
            error="not_found",
            message=message,
            status_code=400,
            details={"value": value},
        )


class UnauthorizedException(FileServiceException):
    """401 - Missing or invalid token, or expired session."""

    def __init__(self, message: str = "Valid token required"):
        super().__init__(
            error="unauthorized",
            message=message,
            status_code=401,
        )


class ForbiddenException(FileServiceException):
    """403 - Valid token but insufficient permissions."""

    def __init__(self, message: str = "Access denied", details: dict[str, Any] | None = None):
        super().__init__(
            error="forbidden",
            message=message,
            status_code=403,
            details=details,
        )


class PayloadTooLargeException(FileServiceException):
    """413 - Upload size exceeds the configured limit."""

    def __init__(self, max_size: int):
        max_size_mb = max_size / (1024 * 1024)
        super().__init__(
            error="payload_too_large",
            message=f"Maximum upload size exceeded ({max_size_mb:.0f}MB limit)",
            status_code=413,
        )


class ConfigurationException(FileServiceException):
    """Startup configuration error. Raised before the service accepts traffic."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            error="configuration_error",
            message=message,
            status_code=500,
            details=details,
        )
