"""
Tongyi Qianwen (Alibaba DashScope) provider implementation.
"""

from typing import Sequence

from .http_base import HTTPProvider
from ..core.exceptions import DecodeFailureError, EmptyResultError
from ..models.enums import Provider
from ..models.internal import Message


class TongyiProvider(HTTPProvider):
    """Qwen through the DashScope text-generation API. Buffered and stateless."""

    model_provider = Provider.TONGYI

    display_name = "Tongyi Qianwen"
    default_model = "qwen-turbo"
    description = "Alibaba Qwen model served by DashScope"
    default_base_url = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"

    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        payload = {
            "model": self.get_model_tag(),
            "input": {"messages": [message.to_wire() for message in messages]},
            "parameters": {
                "max_tokens": self._settings.max_tokens,
                "temperature": self._settings.temperature,
                "top_p": 0.8,
                "result_format": "message",
            },
        }
        data = await self._post_json(payload)

        output = data.get("output") if isinstance(data, dict) else None
        if not isinstance(output, dict):
            raise DecodeFailureError(self.get_provider(), "missing output")
        choices = output.get("choices")
        if not choices:
            raise EmptyResultError(self.get_provider())
        try:
            return choices[0]["message"]["content"]
        except (KeyError, TypeError, IndexError) as e:
            raise DecodeFailureError(self.get_provider(), f"missing field {e}") from e
