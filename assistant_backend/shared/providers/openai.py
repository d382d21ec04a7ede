"""
OpenAI provider implementation.
"""

from typing import AsyncIterator, Optional, Sequence
import openai
import httpx
from openai import AsyncOpenAI
from loguru import logger

from .base import BaseProvider
from ..core.exceptions import TransportFailureError, UpstreamError, DecodeFailureError, EmptyResultError
from ..models.enums import Provider
from ..models.internal import Message, ProviderSettings
from ..services.session import ConversationStore
from ..services.streaming import extract_text_from_chunk


class OpenAIProvider(BaseProvider):
    """OpenAI chat completions through the official async SDK."""

    model_provider = Provider.OPENAI
    supports_streaming = True
    supports_conversation = True

    display_name = "OpenAI GPT"
    default_model = "gpt-4o-mini"
    description = "OpenAI chat completion model"

    def __init__(
        self,
        settings: ProviderSettings,
        store: Optional[ConversationStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(settings, store)
        self._http_client = http_client
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        # Created on first use: the SDK refuses to build a client without a key.
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.get_api_key(),
                base_url=self._settings.base_url or None,
                timeout=self._settings.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    def _request(self, messages: Sequence[Message], stream: bool):
        return self._get_client().chat.completions.create(
            model=self.get_model_tag(),
            messages=[message.to_wire() for message in messages],
            max_tokens=self._settings.max_tokens,
            temperature=self._settings.temperature,
            stream=stream,
        )

    def _translate(self, error: openai.OpenAIError) -> Exception:
        provider = self.get_provider()
        if isinstance(error, openai.APITimeoutError):
            return TransportFailureError(provider, "timed out")
        if isinstance(error, openai.APIConnectionError):
            return TransportFailureError(provider, str(error))
        if isinstance(error, openai.APIStatusError):
            return UpstreamError(provider, error.status_code, error.response.text)
        return DecodeFailureError(provider, str(error))

    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        logger.debug(f"Using {self.get_provider()} - {self.get_model_tag()} endpoint to send non-streaming message")
        try:
            response = await self._request(messages, stream=False)
        except openai.OpenAIError as e:
            raise self._translate(e) from e

        if not response.choices:
            raise EmptyResultError(self.get_provider())
        return response.choices[0].message.content or ""

    async def send_message(self, messages: Sequence[Message], operation: str) -> AsyncIterator[str]:
        logger.debug(f"Using {self.get_provider()} - {self.get_model_tag()} endpoint to send message")
        try:
            stream = await self._request(messages, stream=True)
            async for chunk in stream:
                text = extract_text_from_chunk(chunk)
                if text:
                    yield text
        except openai.OpenAIError as e:
            raise self._translate(e) from e

    async def aclose(self) -> None:
        """Close the SDK client unless it runs on the shared connection pool."""
        if self._client is not None and self._http_client is None:
            await self._client.close()
        self._client = None
