"""Provisioning exceptions.

Every failure the pipeline can report is a ``ProvisioningError`` subclass.
Each subclass carries the HTTP status and machine-readable code the API
layer reports it with.
"""

from typing import Any


class ProvisioningError(Exception):
    """Base class for all provisioning failures.

    Attributes:
        message: Human-readable error message.
        details: Additional error context (remote error payloads, field errors).
    """

    status_code: int = 500
    error_code: str = "PROVISIONING_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize provisioning error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportError(ProvisioningError):
    """Raised when the Shopify endpoint cannot be reached or answers garbage.

    Covers network failures, timeouts, and HTTP errors without a GraphQL
    error list.
    """

    status_code = 503
    error_code = "SHOPIFY_UNAVAILABLE"


class RemoteOperationError(ProvisioningError):
    """Raised when the GraphQL response carries a top-level ``errors`` list."""

    status_code = 502
    error_code = "SHOPIFY_GRAPHQL_ERROR"

    def __init__(self, message: str, errors: Any) -> None:
        """Initialize remote operation error.

        Args:
            message: Human-readable error message.
            errors: Raw ``errors`` payload from the response.
        """
        super().__init__(message, details={"errors": errors})
        self.errors = errors


class ValidationError(ProvisioningError):
    """Raised when a mutation reports operation-scoped field errors."""

    status_code = 422
    error_code = "SHOPIFY_USER_ERRORS"

    def __init__(self, operation: str, user_errors: list[dict[str, Any]]) -> None:
        """Initialize validation error.

        Args:
            operation: Mutation name, e.g. "productCreate".
            user_errors: ``userErrors`` entries with ``field`` and ``message``.
        """
        super().__init__(
            f"Shopify userErrors on {operation}",
            details={"operation": operation, "user_errors": user_errors},
        )
        self.operation = operation
        self.user_errors = user_errors


class IntegrityError(ProvisioningError):
    """Raised when a response lacks an identifier the next stage needs."""

    status_code = 500
    error_code = "SHOPIFY_INTEGRITY_ERROR"

    def __init__(self, operation: str, missing: str) -> None:
        """Initialize integrity error.

        Args:
            operation: Operation whose response was incomplete.
            missing: Name of the missing identifier.
        """
        super().__init__(
            f"{missing} missing in {operation} response",
            details={"operation": operation, "missing": missing},
        )
        self.operation = operation
        self.missing = missing
