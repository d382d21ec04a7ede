"""
Anthropic provider implementation.
"""

from typing import AsyncIterator, List, Optional, Sequence, Tuple
import anthropic
import httpx
from anthropic import AsyncAnthropic
from loguru import logger

from .base import BaseProvider
from ..core.exceptions import TransportFailureError, UpstreamError, DecodeFailureError, EmptyResultError
from ..models.enums import Provider, Role
from ..models.internal import Message, ProviderSettings
from ..services.session import ConversationStore
from ..services.streaming import extract_text_from_chunk


class AnthropicProvider(BaseProvider):
    """Anthropic Claude messages API through the official async SDK."""

    model_provider = Provider.ANTHROPIC
    supports_streaming = True
    supports_conversation = True

    display_name = "Anthropic Claude"
    default_model = "claude-3-5-haiku-latest"
    description = "Anthropic Claude model"

    def __init__(
        self,
        settings: ProviderSettings,
        store: Optional[ConversationStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(settings, store)
        self._http_client = http_client
        self._client: Optional[AsyncAnthropic] = None

    def _get_client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(
                api_key=self.get_api_key(),
                base_url=self._settings.base_url or None,
                timeout=self._settings.timeout,
                max_retries=0,
                http_client=self._http_client,
            )
        return self._client

    @staticmethod
    def _split_system(messages: Sequence[Message]) -> Tuple[str, List[dict]]:
        """The messages API takes the system prompt as a separate parameter."""
        system = "\n\n".join(m.content for m in messages if m.role == Role.SYSTEM)
        turns = [m.to_wire() for m in messages if m.role != Role.SYSTEM]
        return system, turns

    def _translate(self, error: anthropic.AnthropicError) -> Exception:
        provider = self.get_provider()
        if isinstance(error, anthropic.APITimeoutError):
            return TransportFailureError(provider, "timed out")
        if isinstance(error, anthropic.APIConnectionError):
            return TransportFailureError(provider, str(error))
        if isinstance(error, anthropic.APIStatusError):
            return UpstreamError(provider, error.status_code, error.response.text)
        return DecodeFailureError(provider, str(error))

    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        logger.debug(f"Using {self.get_provider()} - {self.get_model_tag()} endpoint to send non-streaming message")
        system, turns = self._split_system(messages)
        try:
            response = await self._get_client().messages.create(
                model=self.get_model_tag(),
                system=system,
                messages=turns,
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
            )
        except anthropic.AnthropicError as e:
            raise self._translate(e) from e

        texts = [block.text for block in response.content if getattr(block, "type", None) == "text"]
        if not texts:
            raise EmptyResultError(self.get_provider())
        return "".join(texts)

    async def send_message(self, messages: Sequence[Message], operation: str) -> AsyncIterator[str]:
        logger.debug(f"Using {self.get_provider()} - {self.get_model_tag()} endpoint to send message")
        system, turns = self._split_system(messages)
        try:
            stream = await self._get_client().messages.create(
                model=self.get_model_tag(),
                system=system,
                messages=turns,
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
                stream=True,
            )
            async for event in stream:
                text = extract_text_from_chunk(event)
                if text:
                    yield text
        except anthropic.AnthropicError as e:
            raise self._translate(e) from e

    async def aclose(self) -> None:
        """Close the SDK client unless it runs on the shared connection pool."""
        if self._client is not None and self._http_client is None:
            await self._client.close()
        self._client = None
