"""
Response models for API endpoints.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .internal import ModelInfo


class _CamelResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class UnifiedAIResponse(_CamelResponse):
    """Buffered result of a unified AI request."""
    result: str = Field(..., description="Generated text")
    function_type: str = Field(..., alias="functionType", description="Operation performed")
    model_name: str = Field(..., alias="modelName", description="Provider key that served the request")


class ChatResponse(_CamelResponse):
    """Reply to a chat turn."""
    result: str = Field(..., description="Assistant reply")
    model_name: str = Field(..., alias="modelName", description="Provider key that served the request")
    session_id: str = Field("", alias="sessionID", description="Conversation session key")


class ModelsResponse(_CamelResponse):
    """Catalog of registered models."""
    models: List[ModelInfo] = Field(..., description="Registered models in registration order")
    current: Optional[str] = Field(None, description="Active provider key")


class SwitchModelResponse(_CamelResponse):
    """Outcome of a model switch."""
    success: bool = Field(..., description="Whether the switch happened")
    message: str = Field(..., description="Human readable outcome")
    model_name: str = Field(..., alias="modelName", description="Active provider key after the switch")


class SessionResponse(_CamelResponse):
    """Newly issued session key."""
    session_id: str = Field(..., alias="sessionID", description="Conversation session key")


class ResetSessionResponse(_CamelResponse):
    """Outcome of clearing a session."""
    session_id: str = Field(..., alias="sessionID", description="Conversation session key")
    cleared: bool = Field(True, description="History was cleared")


class LegacyAIResponse(BaseModel):
    """Result of a single-operation request."""
    result: str = Field(..., description="Generated text")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Service version")
    uptime: float = Field(..., description="Service uptime in seconds")
    providers: Dict[str, bool] = Field(default_factory=dict, description="Availability per registered provider")


class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
