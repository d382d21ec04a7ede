"""
Base for backends speaking the OpenAI chat-completions wire format.
"""

from typing import Any, AsyncIterator, Dict, Sequence

from .http_base import HTTPProvider
from ..core.exceptions import DecodeFailureError, EmptyResultError
from ..models.internal import Message
from ..services.streaming import extract_text_from_chunk


class OpenAICompatibleProvider(HTTPProvider):
    """Chat-completions request/response handling shared by DeepSeek, Wenxin and Zhipu."""

    top_p: float = 1.0

    def _extra_params(self) -> Dict[str, Any]:
        return {}

    def _payload(self, messages: Sequence[Message], stream: bool) -> Dict[str, Any]:
        payload = {
            "model": self.get_model_tag(),
            "messages": [message.to_wire() for message in messages],
            "max_tokens": self._settings.max_tokens,
            "temperature": self._settings.temperature,
            "top_p": self.top_p,
            "stream": stream,
        }
        payload.update(self._extra_params())
        return payload

    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        data = await self._post_json(self._payload(messages, stream=False))

        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices:
            raise EmptyResultError(self.get_provider())
        try:
            content = choices[0]["message"]["content"]
        except (KeyError, TypeError, IndexError) as e:
            raise DecodeFailureError(self.get_provider(), f"missing field {e}") from e
        if content is None:
            raise DecodeFailureError(self.get_provider(), "message content is null")
        return content

    async def send_message(self, messages: Sequence[Message], operation: str) -> AsyncIterator[str]:
        async for event in self._stream_sse(self._payload(messages, stream=True)):
            text = extract_text_from_chunk(event)
            if text:
                yield text
