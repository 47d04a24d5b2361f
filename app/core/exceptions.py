"""
Custom Exceptions
Application-specific exception classes
"""

from typing import Optional


class CatalogException(Exception):
    """Base exception for all catalog errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationException(CatalogException):
    """Raised when configuration is invalid"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details
        )


class ExternalServiceException(CatalogException):
    """Raised when the product store (Convex) cannot be reached or rejects a call"""

    def __init__(self, service: str, error: str, function_path: Optional[str] = None):
        details = {"service": service, "error": error}
        if function_path:
            details["function"] = function_path
        super().__init__(
            message=f"External service error: {service}",
            code="EXTERNAL_SERVICE_ERROR",
            details=details
        )


class ValidationException(CatalogException):
    """Raised when input validation fails"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field} if field else {}
        )


class InvalidCursorException(ValidationException):
    """Raised when a pagination cursor was not issued by the store"""

    def __init__(self, cursor: str):
        super().__init__(
            message=f"Invalid pagination cursor: {cursor}",
            field="cursor"
        )
