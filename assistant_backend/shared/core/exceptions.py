"""
Exceptions raised by the orchestration core and rendered by the API layer.
"""

from typing import Optional, Dict, Any
from fastapi import status


class AssistantError(Exception):
    """
    Base class for every error the orchestration core surfaces to a caller.

    Subclasses fix the machine-readable ``code``, the HTTP status used when the
    error reaches a buffered request, and a ``category`` telling operators
    whether the problem is in the request, the deployment configuration or
    the upstream model service.
    """

    code: str = "assistant_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    category: str = "internal"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Render the error in the ErrorResponse shape."""
        return {
            "error": self.message,
            "code": self.code,
            "details": {"category": self.category, **self.details},
        }


class UnsupportedOperationError(AssistantError):
    """Raised when a request names an unknown functionType."""

    code = "unsupported_operation"
    status_code = status.HTTP_400_BAD_REQUEST
    category = "request"

    def __init__(self, operation: str):
        super().__init__(f"Unsupported function type: {operation!r}", {"functionType": operation})
        self.operation = operation


class NoProviderAvailableError(AssistantError):
    """Raised when no active provider can be resolved for a request."""

    code = "no_provider_available"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    category = "configuration"

    def __init__(self, active_key: Optional[str]):
        super().__init__(
            "Current AI model is not available, please switch model first",
            {"activeModel": active_key},
        )


class ModelNotFoundError(AssistantError):
    """Raised when switching to a model that is not in the catalog."""

    code = "model_not_found"
    status_code = status.HTTP_400_BAD_REQUEST
    category = "request"

    def __init__(self, model_name: str):
        super().__init__(f"Model {model_name!r} does not exist", {"modelName": model_name})


class ModelUnavailableError(AssistantError):
    """Raised when switching to a catalog model whose provider lacks credentials."""

    code = "model_unavailable"
    status_code = status.HTTP_400_BAD_REQUEST
    category = "configuration"

    def __init__(self, model_name: str):
        super().__init__(f"Model {model_name!r} is not available", {"modelName": model_name})


class ProviderError(AssistantError):
    """Base class for failures of a backend call made by a provider."""

    code = "provider_error"
    status_code = status.HTTP_502_BAD_GATEWAY
    category = "upstream"

    def __init__(self, provider: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"{provider}: {message}", {"provider": provider, **(details or {})})
        self.provider = provider


class NotConfiguredError(ProviderError):
    """The provider has no credentials configured."""

    code = "not_configured"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    category = "configuration"

    def __init__(self, provider: str):
        super().__init__(provider, "API credentials are not configured")


class TransportFailureError(ProviderError):
    """Network failure or timeout while talking to the backend."""

    code = "transport_failure"
    status_code = status.HTTP_504_GATEWAY_TIMEOUT

    def __init__(self, provider: str, reason: str):
        super().__init__(provider, f"request failed: {reason}")


class UpstreamError(ProviderError):
    """The backend answered with a non-2xx status."""

    code = "upstream_error"

    def __init__(self, provider: str, status: int, body: str):
        super().__init__(provider, f"API request failed: {status} - {body}", {"status": status})
        self.status = status
        self.body = body


class DecodeFailureError(ProviderError):
    """The backend payload could not be decoded."""

    code = "decode_failure"

    def __init__(self, provider: str, reason: str):
        super().__init__(provider, f"failed to decode response: {reason}")


class EmptyResultError(ProviderError):
    """The backend returned zero choices or completions."""

    code = "empty_result"

    def __init__(self, provider: str):
        super().__init__(provider, "API returned an empty result")
