"""
LLM provider implementations.
"""

from .base import BaseProvider
from .http_base import HTTPProvider
from .registry import ProviderRegistry, ProviderRegistration

# Import all provider implementations
from .mock import MockProvider
from .deepseek import DeepSeekProvider
from .tongyi import TongyiProvider
from .wenxin import WenxinProvider
from .zhipu import ZhipuProvider
from .openai import OpenAIProvider
from .anthropic import AnthropicProvider

__all__ = [
    "BaseProvider",
    "HTTPProvider",
    "ProviderRegistry",
    "ProviderRegistration",
    "MockProvider",
    "DeepSeekProvider",
    "TongyiProvider",
    "WenxinProvider",
    "ZhipuProvider",
    "OpenAIProvider",
    "AnthropicProvider"
]
