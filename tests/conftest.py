"""
Shared fixtures.
"""

import json
from typing import Callable, List, Sequence

import httpx
import pytest

from assistant_backend.shared.models.enums import Provider
from assistant_backend.shared.models.internal import Message, ProviderSettings
from assistant_backend.shared.providers import BaseProvider, MockProvider
from assistant_backend.shared.providers.registry import ProviderRegistry
from assistant_backend.shared.services.query import Orchestrator
from assistant_backend.shared.services.session import ConversationStore


PROVIDER_ENV_VARS = [
    f"{provider.value.upper()}_{suffix}" for provider in Provider for suffix in ("API_KEY", "BASE_URL")
] + ["AI_DEFAULT_MODEL", "PROVIDER_CONFIG_FILE"]


class ScriptedProvider(BaseProvider):
    """
    Provider double whose backend replies are scripted per test.

    ``replies`` is consumed one entry per backend call; an exception entry is
    raised instead of returned. ``calls`` records the messages of every call.
    """

    model_provider = Provider.DEEPSEEK
    display_name = "Scripted"
    default_model = "scripted-model"

    def __init__(self, settings=None, store=None, *, streaming=False, conversation=True, replies=None):
        self.supports_streaming = streaming
        self.supports_conversation = conversation
        super().__init__(settings or ProviderSettings(api_key="test-key"), store)
        self.replies: List = list(replies or [])
        self.calls: List[Sequence[Message]] = []

    def _next(self, messages):
        self.calls.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def send_message_non_streaming(self, messages, operation):
        return self._next(messages)

    async def send_message(self, messages, operation):
        reply = self._next(messages)
        for piece in reply:
            if isinstance(piece, Exception):
                raise piece
            yield piece


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Keep real credentials in the environment from leaking into tests."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def store():
    return ConversationStore(max_turns=20)


@pytest.fixture
def mock_provider(store):
    return MockProvider(ProviderSettings(), store)


@pytest.fixture
def registry(mock_provider):
    registry = ProviderRegistry()
    registry.register("mock", mock_provider)
    registry.select_active("mock")
    return registry


@pytest.fixture
def orchestrator(registry, store):
    return Orchestrator(registry, store)


def json_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def sse_body(*events, done: bool = True) -> bytes:
    """Render SSE ``data:`` lines for the given JSON events."""
    lines = [f"data: {json.dumps(event)}\n\n" for event in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode()


def completion_delta(text: str) -> dict:
    return {"choices": [{"index": 0, "delta": {"content": text}}]}
