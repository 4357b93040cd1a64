"""Application error types.

Errors deriving from APIError are rendered by the error handler middleware
with their status code. PersistenceError is never rendered: order bookkeeping
failures are logged and the payment flow continues.
"""

from typing import Any

from fastapi import status


class APIError(Exception):
    """Base exception for API errors.

    Use this class to raise application-specific errors that should
    be returned to the client with a specific status code and message.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_type: str = "api_error",
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code to return.
            error_type: Error category/type for client handling.
            details: Optional additional error details.
        """
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_type="not_found",
            details=details,
        )


class ValidationError(APIError):
    """Client-correctable input error (bad product, document, payer data)."""

    def __init__(self, message: str = "Validation error", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_type="validation_error",
            details=details,
        )


class AuthenticationError(APIError):
    """Authentication failure error."""

    def __init__(self, message: str = "Authentication required", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_type="authentication_error",
            details=details,
        )


class AuthorizationError(APIError):
    """Authorization failure error."""

    def __init__(self, message: str = "Access denied", details: list[dict[str, Any]] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_type="authorization_error",
            details=details,
        )


class GatewayError(APIError):
    """Payment gateway rejected the request or could not be reached.

    provider_status is None when the call never produced an HTTP response.
    """

    def __init__(
        self,
        provider: str,
        message: str = "Could not create the PIX payment. Please try again in a few minutes.",
        provider_status: int | None = None,
        provider_response: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            error_type="gateway_error",
        )
        self.provider = provider
        self.provider_status = provider_status
        self.provider_response = provider_response


class GatewayNotConfiguredError(GatewayError):
    """Gateway credentials are missing for this deployment."""

    def __init__(self, provider: str, message: str = "Payment gateway is not configured") -> None:
        super().__init__(provider=provider, message=message)
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        self.error_type = "gateway_not_configured"


class MalformedWebhookError(APIError):
    """Webhook body could not be parsed.

    The only webhook failure answered with a non-2xx status, so the
    gateway redelivers.
    """

    def __init__(self, message: str = "Invalid webhook payload") -> None:
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_type="malformed_webhook",
        )


class PersistenceError(Exception):
    """Local order bookkeeping failed after the gateway accepted a charge."""
