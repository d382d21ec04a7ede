"""
Tests for stream sinks and SSE framing.
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from assistant_backend.shared.services.streaming import (
    DONE_FRAME,
    BufferedSink,
    EventStreamSink,
    extract_text_from_chunk,
    relay_events,
)


def decode(frame: str) -> dict:
    assert frame.startswith("data: ") and frame.endswith("\n\n")
    return json.loads(frame[len("data: "):])


class TestBufferedSink:

    @pytest.mark.asyncio
    async def test_collects_chunks_in_order(self):
        sink = BufferedSink()
        for piece in ("a", "b", "c"):
            await sink.send(piece)
        await sink.close()

        assert sink.text == "abc"
        assert sink.error is None
        assert sink.finished

    @pytest.mark.asyncio
    async def test_nothing_after_fail(self):
        sink = BufferedSink()
        await sink.send("partial")
        await sink.fail("boom")
        await sink.send("late")
        await sink.close()

        assert sink.chunks == ["partial"]
        assert sink.error == "boom"


class TestEventStreamSink:

    @pytest.mark.asyncio
    async def test_frames_then_done(self):
        sink = EventStreamSink(provider="deepseek", model="deepseek-chat")
        await sink.send("Hel")
        await sink.send("lo")
        await sink.close()

        frames = [frame async for frame in sink.events()]

        assert frames[-1] == DONE_FRAME
        chunks = [decode(frame) for frame in frames[:-1]]
        assert [c["content"] for c in chunks] == ["Hel", "lo"]
        assert chunks[0]["provider"] == "deepseek"
        assert chunks[0]["model"] == "deepseek-chat"
        assert chunks[0]["type"] == "chunk"

    @pytest.mark.asyncio
    async def test_error_frame_is_terminal(self):
        sink = EventStreamSink(provider="zhipu", model="glm-4")
        await sink.send("part")
        await sink.fail("zhipu: request failed: timed out")
        await sink.send("ignored")

        frames = [frame async for frame in sink.events()]

        assert len(frames) == 2
        error = decode(frames[-1])
        assert error == {"error": "zhipu: request failed: timed out", "type": "error"}

    @pytest.mark.asyncio
    async def test_non_ascii_content_is_kept_verbatim(self):
        sink = EventStreamSink(provider="tongyi", model="qwen-turbo")
        await sink.send("你好")
        await sink.close()

        frames = [frame async for frame in sink.events()]
        assert "你好" in frames[0]


class TestRelayEvents:

    @pytest.mark.asyncio
    async def test_relays_producer_output(self):
        sink = EventStreamSink(provider="mock", model="mock-model")

        async def producer():
            await sink.send("one")
            await sink.send("two")
            await sink.close()

        frames = [frame async for frame in relay_events(sink, producer())]
        assert [decode(f)["content"] for f in frames[:-1]] == ["one", "two"]
        assert frames[-1] == DONE_FRAME

    @pytest.mark.asyncio
    async def test_consumer_disconnect_cancels_producer(self):
        sink = EventStreamSink(provider="mock", model="mock-model")
        cancelled = asyncio.Event()

        async def producer():
            await sink.send("first")
            try:
                await asyncio.sleep(3600)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        stream = relay_events(sink, producer())
        first = await stream.__anext__()
        assert decode(first)["content"] == "first"

        await stream.aclose()
        await asyncio.wait_for(cancelled.wait(), timeout=1)
        assert cancelled.is_set()


class TestExtractText:

    def test_openai_style_object(self):
        chunk = SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content="hi"))])
        assert extract_text_from_chunk(chunk) == "hi"

    def test_anthropic_delta_event(self):
        event = SimpleNamespace(type="content_block_delta", delta=SimpleNamespace(text="hey"))
        assert extract_text_from_chunk(event) == "hey"

    def test_dict_delta_and_message(self):
        assert extract_text_from_chunk({"choices": [{"delta": {"content": "d"}}]}) == "d"
        assert extract_text_from_chunk({"choices": [{"message": {"content": "m"}}]}) == "m"

    def test_unknown_shapes(self):
        assert extract_text_from_chunk({"choices": []}) is None
        assert extract_text_from_chunk(42) is None
