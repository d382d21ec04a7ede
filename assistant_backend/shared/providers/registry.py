"""
Provider Registry - registered provider instances and the active selection.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
from loguru import logger

from .base import BaseProvider
from ..models.internal import ModelInfo


@dataclass
class ProviderRegistration:
    """A provider registered under ``key`` with its description at registration time."""
    key: str
    provider: BaseProvider
    info: ModelInfo


class ProviderRegistry:
    """
    Registry of provider instances keyed by provider name.

    Registration order is catalog order. The active key is a plain attribute
    read once per request; switching it does not affect requests that have
    already resolved their provider.
    """

    def __init__(self):
        self._registrations: Dict[str, ProviderRegistration] = {}
        self._active_key: Optional[str] = None
        logger.info("ProviderRegistry initialized")

    def register(self, key: str, provider: BaseProvider) -> None:
        """
        Register a provider instance.

        Args:
            key: Provider key (e.g., "deepseek")
            provider: Provider instance implementing BaseProvider

        Raises:
            ValueError: If provider is not a BaseProvider instance
        """
        if not isinstance(provider, BaseProvider):
            raise ValueError(f"Provider {type(provider).__name__} must inherit from BaseProvider")

        if key in self._registrations:
            logger.warning(f"Provider '{key}' already registered, overwriting with {type(provider).__name__}")

        self._registrations[key] = ProviderRegistration(key=key, provider=provider, info=provider.describe())
        logger.info(f"Registered provider: {key} -> {provider.summary()}")

    def select_active(self, key: str) -> None:
        """Set the active provider key. Unknown keys are accepted and resolve to no provider."""
        logger.info(f"Active provider changed: {self._active_key} -> {key}")
        self._active_key = key

    @property
    def current_key(self) -> Optional[str]:
        return self._active_key

    def current_provider(self) -> Optional[BaseProvider]:
        """The active provider, or None when the active key is not registered."""
        if self._active_key is None:
            return None
        return self.get(self._active_key)

    def get(self, key: str) -> Optional[BaseProvider]:
        registration = self._registrations.get(key)
        return registration.provider if registration else None

    def find(self, model_name: str) -> Optional[str]:
        """
        Resolve a catalog model name or a provider key to a provider key.

        Returns:
            Provider key if found, None otherwise
        """
        if model_name in self._registrations:
            return model_name
        for key, registration in self._registrations.items():
            if registration.info.name == model_name:
                return key
        return None

    def catalog(self, refresh: bool = False) -> List[ModelInfo]:
        """
        Catalog of registered providers in registration order.

        Args:
            refresh: Re-describe the live providers instead of returning the
                snapshots taken at registration time
        """
        if refresh:
            return [registration.provider.describe() for registration in self._registrations.values()]
        return [registration.info for registration in self._registrations.values()]

    def keys(self) -> List[str]:
        return list(self._registrations.keys())

    def providers(self) -> List[BaseProvider]:
        return [registration.provider for registration in self._registrations.values()]

    async def aclose(self) -> None:
        """Close the backend clients of every registered provider."""
        for provider in self.providers():
            await provider.aclose()
        logger.info(f"Closed {len(self)} providers")

    def __len__(self) -> int:
        return len(self._registrations)
