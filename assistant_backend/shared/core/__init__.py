"""
Core backend components.
"""

from .config import Settings
from .exceptions import (
    AssistantError,
    UnsupportedOperationError,
    NoProviderAvailableError,
    ModelNotFoundError,
    ModelUnavailableError,
    ProviderError,
    NotConfiguredError,
    TransportFailureError,
    UpstreamError,
    DecodeFailureError,
    EmptyResultError
)

__all__ = [
    "Settings",
    "AssistantError",
    "UnsupportedOperationError",
    "NoProviderAvailableError",
    "ModelNotFoundError",
    "ModelUnavailableError",
    "ProviderError",
    "NotConfiguredError",
    "TransportFailureError",
    "UpstreamError",
    "DecodeFailureError",
    "EmptyResultError"
]
