"""
Data models for the assistant backend.
"""

from .enums import Provider, Operation, Role, CHAT_OPERATION

from .requests import (
    UnifiedAIRequest,
    ChatRequest,
    SwitchModelRequest,
    LegacyAIRequest
)

from .responses import (
    UnifiedAIResponse,
    ChatResponse,
    ModelsResponse,
    SwitchModelResponse,
    SessionResponse,
    ResetSessionResponse,
    LegacyAIResponse,
    HealthResponse,
    ErrorResponse
)

from .internal import (
    ModelInfo,
    Message,
    ProviderSettings,
    ProviderConfig
)

__all__ = [
    # Enums
    "Provider",
    "Operation",
    "Role",
    "CHAT_OPERATION",

    # Request models
    "UnifiedAIRequest",
    "ChatRequest",
    "SwitchModelRequest",
    "LegacyAIRequest",

    # Response models
    "UnifiedAIResponse",
    "ChatResponse",
    "ModelsResponse",
    "SwitchModelResponse",
    "SessionResponse",
    "ResetSessionResponse",
    "LegacyAIResponse",
    "HealthResponse",
    "ErrorResponse",

    # Internal models
    "ModelInfo",
    "Message",
    "ProviderSettings",
    "ProviderConfig"
]
