"""
Request models for API endpoints.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class _CamelRequest(BaseModel):
    """Requests arrive with camelCase keys; snake_case is accepted too."""
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())


class UnifiedAIRequest(_CamelRequest):
    """Request for the unified writing endpoint."""
    function_type: str = Field(..., alias="functionType", description="continue, polish, summarize, expand or generate")
    document_summary: str = Field("", alias="documentSummary", description="Summary of the whole document")
    user_requirement: str = Field("", alias="userRequirement", description="What the user asks for")
    selected_text: str = Field("", alias="selectedText", description="Text the operation applies to")
    context_text: str = Field("", alias="contextText", description="Surrounding document text")
    cursor_position: Optional[int] = Field(None, alias="cursorPosition", description="Reserved")
    model_name: Optional[str] = Field(None, alias="modelName", description="Model or provider key to use")
    session_id: str = Field("", alias="sessionID", description="Conversation session key")
    stream: bool = Field(False, description="Stream the response as server-sent events")

class ChatRequest(_CamelRequest):
    """Free-form chat turn."""
    message: str = Field(..., min_length=1, description="User message")
    session_id: str = Field("", alias="sessionID", description="Conversation session key")
    model_name: Optional[str] = Field(None, alias="modelName", description="Model or provider key to use")


class SwitchModelRequest(_CamelRequest):
    """Request to change the active model."""
    model_name: str = Field(..., alias="modelName", min_length=1, description="Model name or provider key")


class LegacyAIRequest(_CamelRequest):
    """Single-operation request carrying raw text."""
    prompt: str = Field("", description="Prompt for continuation")
    text: str = Field("", description="Text to polish or summarize")

    def content(self) -> str:
        """Whichever of ``text`` and ``prompt`` was supplied, ``text`` first."""
        return self.text or self.prompt
