"""
Base provider class for LLM providers.
"""

from abc import ABC, abstractmethod
import hashlib
from typing import AsyncIterator, List, Optional, Sequence
from loguru import logger

from ..models.enums import Provider, Operation, Role, CHAT_OPERATION
from ..core.exceptions import NotConfiguredError, EmptyResultError
from ..models.internal import Message, ModelInfo, ProviderSettings
from ..services.prompt import system_instruction
from ..services.session import ConversationStore
from ..services.streaming import StreamSink


class BaseProvider(ABC):
    """
    Abstract base class for LLM providers.

    Every backend exposes the same capability set: the three single-turn
    writing calls, multi-turn chat, streaming delivery into a sink, and a
    self-description. Subclasses only implement the backend call itself
    (``send_message_non_streaming`` and, when ``supports_streaming`` is set,
    ``send_message``); prompt assembly and conversation bookkeeping live here.

    Conversation-aware providers splice the session history between the
    system instruction and the new user turn, and record the exchange only
    after the backend call succeeded.
    """

    model_provider: Provider
    supports_streaming: bool = False
    supports_conversation: bool = False

    display_name: str = ""
    default_model: str = ""
    description: str = ""

    def __init__(self, settings: ProviderSettings, store: Optional[ConversationStore] = None):
        """
        Initialize a provider with its resolved settings.

        Args:
            settings: Credentials, endpoint, model and limits for this provider
            store: Conversation store used when the provider keeps session history
        """
        self._settings = settings
        self._store = store if self.supports_conversation else None
        logger.info(f"Initialized {self.get_provider()} provider with model {self.get_model_tag()}")

    @abstractmethod
    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        """Perform one buffered backend call and return the full text."""

    async def send_message(self, messages: Sequence[Message], operation: str) -> AsyncIterator[str]:
        """
        Perform one streaming backend call, yielding text pieces as they arrive.

        Backends that set ``supports_streaming`` override this; the default
        makes one buffered call and yields its whole result.
        """
        yield await self.send_message_non_streaming(messages, operation)

    async def continue_writing(self, prompt: str) -> str:
        return await self._complete(Operation.CONTINUE.value, prompt)

    async def polish_text(self, text: str) -> str:
        return await self._complete(Operation.POLISH.value, text)

    async def summarize_text(self, text: str) -> str:
        return await self._complete(Operation.SUMMARIZE.value, text)

    async def chat(self, message: str, session_id: str = "") -> str:
        """
        Multi-turn chat when the provider keeps history, else a single isolated turn.
        """
        self._ensure_configured()
        messages = self._assemble(CHAT_OPERATION, message, session_id)
        result = await self.send_message_non_streaming(messages, CHAT_OPERATION)
        self._remember(session_id, message, result)
        return result

    async def stream_call(self, operation: str, content: str, session_id: str, sink: StreamSink) -> None:
        """
        Deliver the response for ``content`` into ``sink``.

        Backends without native streaming make one buffered call and send the
        whole result as a single chunk. Terminal signalling is left to the caller.
        """
        self._ensure_configured()
        messages = self._assemble(operation, content, session_id)

        if self.supports_streaming:
            pieces: List[str] = []
            async for piece in self.send_message(messages, operation):
                pieces.append(piece)
                await sink.send(piece)
            if not pieces:
                raise EmptyResultError(self.get_provider())
            result = "".join(pieces)
        else:
            result = await self.send_message_non_streaming(messages, operation)
            await sink.send(result)

        self._remember(session_id, content, result)

    def describe(self) -> ModelInfo:
        """Self-description with availability evaluated now."""
        return ModelInfo(
            name=self.get_model_tag(),
            display_name=self._settings.display_name or self.display_name or self.get_model_tag(),
            provider_key=self.get_provider(),
            description=self._settings.description or self.description,
            max_tokens=self._settings.max_tokens,
            is_available=self.is_available(),
        )

    def is_available(self) -> bool:
        """Credential presence only; never touches the network."""
        return self._settings.has_credentials()

    def get_api_key(self) -> str:
        """Get the API key for this provider."""
        return self._settings.api_key

    def get_provider(self) -> str:
        """Get the provider name."""
        return self.model_provider.value

    def get_model_tag(self) -> str:
        """Get the model tag."""
        return self._settings.model or self.default_model

    async def aclose(self) -> None:
        """Release backend clients held by this provider."""

    def summary(self) -> str:
        """Get a summary string for this provider."""
        api_key_hash = hashlib.sha256(self.get_api_key().encode()).hexdigest()[:8]
        return f"{self.get_provider()}/{self.get_model_tag()} ({api_key_hash})"

    async def _complete(self, operation: str, content: str) -> str:
        self._ensure_configured()
        messages = [
            Message(role=Role.SYSTEM, content=system_instruction(operation)),
            Message(role=Role.USER, content=content),
        ]
        return await self.send_message_non_streaming(messages, operation)

    def _ensure_configured(self) -> None:
        if not self.is_available():
            raise NotConfiguredError(self.get_provider())

    def _tracks(self, session_id: str) -> bool:
        return self._store is not None and bool(session_id)

    def _assemble(self, operation: str, content: str, session_id: str) -> List[Message]:
        history = self._store.snapshot(session_id) if self._tracks(session_id) else ()
        return [
            Message(role=Role.SYSTEM, content=system_instruction(operation)),
            *history,
            Message(role=Role.USER, content=content),
        ]

    def _remember(self, session_id: str, user_content: str, assistant_content: str) -> None:
        if self._tracks(session_id):
            self._store.append_turn(session_id, user_content, assistant_content)
