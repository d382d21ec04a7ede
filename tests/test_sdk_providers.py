"""
Tests for the SDK-backed providers, with the SDK clients pointed at a mock transport.
"""

import json

import httpx
import pytest
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from assistant_backend.shared.core.exceptions import EmptyResultError, TransportFailureError, UpstreamError
from assistant_backend.shared.models.internal import ProviderSettings
from assistant_backend.shared.providers import AnthropicProvider, OpenAIProvider
from assistant_backend.shared.services.streaming import BufferedSink

from conftest import completion_delta, json_transport, sse_body


def openai_provider(handler, store=None) -> OpenAIProvider:
    provider = OpenAIProvider(ProviderSettings(api_key="sk-test", model="gpt-test"), store)
    provider._client = AsyncOpenAI(api_key="sk-test", http_client=json_transport(handler), max_retries=0)
    return provider


def anthropic_provider(handler, store=None) -> AnthropicProvider:
    provider = AnthropicProvider(ProviderSettings(api_key="sk-ant-test", model="claude-test"), store)
    provider._client = AsyncAnthropic(api_key="sk-ant-test", http_client=json_transport(handler), max_retries=0)
    return provider


def chat_completion(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-test",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


def anthropic_message(*texts: str) -> dict:
    return {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-test",
        "content": [{"type": "text", "text": text} for text in texts],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 1, "output_tokens": 1},
    }


class TestOpenAIProvider:

    @pytest.mark.asyncio
    async def test_buffered_completion(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=chat_completion("polished"))

        provider = openai_provider(handler)

        assert await provider.polish_text("rough") == "polished"
        assert captured["body"]["model"] == "gpt-test"
        assert captured["body"]["messages"][-1] == {"role": "user", "content": "rough"}

    @pytest.mark.asyncio
    async def test_streaming_records_history(self, store):
        def handler(request: httpx.Request) -> httpx.Response:
            events = [
                {**completion_delta(piece), "id": "c1", "object": "chat.completion.chunk", "created": 0, "model": "gpt-test"}
                for piece in ("Hi", " there")
            ]
            return httpx.Response(200, content=sse_body(*events), headers={"content-type": "text/event-stream"})

        provider = openai_provider(handler, store)
        sink = BufferedSink()

        await provider.stream_call("continue", "hello", "s1", sink)

        assert sink.chunks == ["Hi", " there"]
        assert store.snapshot("s1")[-1].content == "Hi there"

    @pytest.mark.asyncio
    async def test_status_error_maps_to_upstream(self):
        provider = openai_provider(lambda r: httpx.Response(500, json={"error": {"message": "down"}}))

        with pytest.raises(UpstreamError) as exc_info:
            await provider.continue_writing("x")
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_connection_error_maps_to_transport(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportFailureError):
            await openai_provider(handler).continue_writing("x")

    @pytest.mark.asyncio
    async def test_no_choices(self):
        body = {**chat_completion("x"), "choices": []}
        with pytest.raises(EmptyResultError):
            await openai_provider(lambda r: httpx.Response(200, json=body)).continue_writing("x")


class TestAnthropicProvider:

    @pytest.mark.asyncio
    async def test_system_prompt_is_separate(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=anthropic_message("sum", "mary"))

        provider = anthropic_provider(handler)

        assert await provider.summarize_text("long text") == "summary"
        body = captured["body"]
        assert "summary" in body["system"]
        assert body["messages"] == [{"role": "user", "content": "long text"}]

    @pytest.mark.asyncio
    async def test_chat_uses_history(self, store):
        store.append_turn("s1", "first", "reply one")
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=anthropic_message("reply two"))

        provider = anthropic_provider(handler, store)
        await provider.chat("second", "s1")

        assert [m["content"] for m in bodies[0]["messages"]] == ["first", "reply one", "second"]
        assert len(store.snapshot("s1")) == 4

    @pytest.mark.asyncio
    async def test_status_error_maps_to_upstream(self):
        provider = anthropic_provider(
            lambda r: httpx.Response(401, json={"type": "error", "error": {"type": "authentication_error", "message": "bad key"}})
        )

        with pytest.raises(UpstreamError) as exc_info:
            await provider.continue_writing("x")
        assert exc_info.value.status == 401


class TestClientLifecycle:

    @pytest.mark.asyncio
    async def test_aclose_closes_own_sdk_client(self):
        provider = OpenAIProvider(ProviderSettings(api_key="sk-test"))
        client = provider._get_client()

        await provider.aclose()

        assert client.is_closed()
        assert provider._client is None

    @pytest.mark.asyncio
    async def test_aclose_leaves_shared_pool_open(self):
        shared = httpx.AsyncClient()
        provider = AnthropicProvider(ProviderSettings(api_key="sk-ant-test"), http_client=shared)
        provider._get_client()

        await provider.aclose()

        assert not shared.is_closed
        await shared.aclose()
