"""
Custom exceptions for the Manutenção Pro application.
Provides structured error handling with proper HTTP status codes and messages.
"""

from typing import Any, Dict, Optional
from fastapi import HTTPException, status


class BusinessLogicError(Exception):
    """Base exception for business logic errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BusinessLogicError):
    """Raised when input validation fails."""
    pass


class NotFoundError(BusinessLogicError):
    """Raised when a requested resource is not found."""
    pass


class AuthenticationError(BusinessLogicError):
    """Raised when credentials or tokens are rejected."""
    pass


def business_exception_to_http(exc: BusinessLogicError) -> HTTPException:
    """Convert business logic exceptions to appropriate HTTP exceptions."""

    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": exc.message, "type": "validation_error", **exc.details}
        )

    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"message": exc.message, "type": "not_found", **exc.details}
        )

    if isinstance(exc, AuthenticationError):
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": exc.message, "type": "authentication_error", **exc.details}
        )

    # Default to 500 for other business logic errors
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": exc.message, "type": "business_logic_error", **exc.details}
    )


class ErrorHandler:
    """Centralized validation helpers."""

    @staticmethod
    def validate_required_fields(data: Dict[str, Any], required_fields: list[str]) -> None:
        """Validate that all required fields are present and not empty."""
        missing_fields = []
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == "":
                missing_fields.append(field)

        if missing_fields:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing_fields)}",
                {"missing_fields": missing_fields}
            )
