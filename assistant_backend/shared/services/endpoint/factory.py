"""
Factory for creating provider instances from the resolved provider configuration.
"""

from typing import Dict, Optional, Type
import httpx
from loguru import logger

from ...models.enums import Provider
from ...models.internal import ProviderConfig, ProviderSettings
from ...providers.base import BaseProvider
from ...providers.http_base import HTTPProvider
from ...providers.registry import ProviderRegistry
from ...providers import (
    MockProvider,
    DeepSeekProvider,
    TongyiProvider,
    WenxinProvider,
    ZhipuProvider,
    OpenAIProvider,
    AnthropicProvider,
)
from ..session import ConversationStore


# Providers that send their backend calls through the shared connection pool.
POOLED_PROVIDERS = (HTTPProvider, OpenAIProvider, AnthropicProvider)


class EndpointFactory:
    """
    Creates provider instances and assembles the registry at startup.

    The provider class map is fixed; which providers get registered depends
    on the ``enabled`` flag of their configuration block.
    """

    PROVIDER_CLASSES: Dict[Provider, Type[BaseProvider]] = {
        Provider.MOCK: MockProvider,
        Provider.DEEPSEEK: DeepSeekProvider,
        Provider.TONGYI: TongyiProvider,
        Provider.WENXIN: WenxinProvider,
        Provider.ZHIPU: ZhipuProvider,
        Provider.OPENAI: OpenAIProvider,
        Provider.ANTHROPIC: AnthropicProvider,
    }

    def __init__(self, store: ConversationStore, http_client: Optional[httpx.AsyncClient] = None):
        self._store = store
        self._http_client = http_client

    def create_endpoint(self, provider: Provider, settings: ProviderSettings) -> BaseProvider:
        """
        Create a provider instance.

        Args:
            provider: Provider to instantiate
            settings: Resolved settings for that provider

        Returns:
            Provider instance
        """
        provider_class = self.PROVIDER_CLASSES[provider]
        if issubclass(provider_class, POOLED_PROVIDERS):
            instance = provider_class(settings, self._store, http_client=self._http_client)
        else:
            instance = provider_class(settings, self._store)
        logger.info(f"Created {provider.value} provider for model: {instance.get_model_tag()}")
        return instance

    def build_registry(self, config: ProviderConfig) -> ProviderRegistry:
        """
        Register every enabled provider and select the configured default.

        The default may name a provider key or a catalog model name; a default
        that matches nothing is kept as-is so requests fail with
        NoProviderAvailable until a valid model is switched to.
        """
        registry = ProviderRegistry()

        for provider in Provider:
            settings = config.settings_for(provider.value)
            if not settings.enabled:
                logger.info(f"Provider {provider.value} disabled by configuration")
                continue
            registry.register(provider.value, self.create_endpoint(provider, settings))

        default = registry.find(config.default_model)
        if default is None:
            logger.warning(f"Default model {config.default_model!r} does not match any registered provider")
            default = config.default_model
        registry.select_active(default)
        return registry
