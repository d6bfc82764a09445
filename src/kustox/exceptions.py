"""
KustoX - Custom Exceptions.

Centralized exception handling with standardized error responses.
"""

from typing import Any


class KustoxException(Exception):
    """Base exception for KustoX application."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundException(KustoxException):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type} not found: {resource_id}",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class FileNotFoundException(NotFoundException):
    """Raised when a virtual path does not resolve in the results space."""

    def __init__(self, uri: Any):
        super().__init__("file", str(uri))
        self.code = "FILE_NOT_FOUND"
        self.uri = str(uri)


class FeatureDisabledException(KustoxException):
    """Raised when a feature flag is disabled."""

    def __init__(self, feature_name: str):
        super().__init__(
            code="FEATURE_DISABLED",
            message=f"Feature '{feature_name}' is currently disabled",
            status_code=503,
            details={"feature": feature_name},
        )
