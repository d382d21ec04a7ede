"""
Internal domain models.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .enums import Role


class ModelInfo(BaseModel):
    """Self-description a provider reports to the catalog."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    name: str
    display_name: str = Field(..., alias="displayName")
    provider_key: str = Field(..., alias="providerKey")
    description: str = ""
    max_tokens: int = Field(0, alias="maxTokens")
    is_available: bool = Field(False, alias="isAvailable")


class Message(BaseModel):
    """A single conversation turn. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def to_wire(self) -> dict:
        """Plain ``{"role", "content"}`` dict used by chat-completion payloads."""
        return {"role": self.role.value, "content": self.content}


class ProviderSettings(BaseModel):
    """Resolved configuration for one provider."""
    model_config = ConfigDict(protected_namespaces=())

    api_key: str = ""
    base_url: str = ""
    model: str = ""
    max_tokens: int = 2000
    temperature: float = 0.7
    timeout: float = 60.0
    enabled: bool = True
    display_name: Optional[str] = None
    description: Optional[str] = None

    def has_credentials(self) -> bool:
        """Check if an API key is present."""
        return bool(self.api_key.strip())


class ProviderConfig(BaseModel):
    """Full provider configuration: default selection plus per-provider settings."""
    model_config = ConfigDict(protected_namespaces=())

    default_model: str = "mock"
    providers: dict[str, ProviderSettings] = Field(default_factory=dict)

    def settings_for(self, provider: str) -> ProviderSettings:
        """Settings for ``provider``, defaults when it is not configured."""
        return self.providers.get(provider, ProviderSettings())
