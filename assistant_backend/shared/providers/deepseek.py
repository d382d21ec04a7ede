"""
DeepSeek provider implementation.
"""

from typing import Any, Dict

from .openai_compatible import OpenAICompatibleProvider
from ..models.enums import Provider


class DeepSeekProvider(OpenAICompatibleProvider):
    """DeepSeek chat model. Streams over SSE and keeps per-session history."""

    model_provider = Provider.DEEPSEEK
    supports_streaming = True
    supports_conversation = True

    display_name = "DeepSeek Chat"
    default_model = "deepseek-chat"
    description = "DeepSeek chat model with multi-turn conversation"
    default_base_url = "https://api.deepseek.com/v1/chat/completions"

    def _extra_params(self) -> Dict[str, Any]:
        return {
            "frequency_penalty": 0,
            "presence_penalty": 0,
            "response_format": {"type": "text"},
        }
