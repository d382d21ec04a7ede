"""
Stream relay - delivers text chunks to the caller as providers produce them.

Providers write into a StreamSink and never see the transport. The SSE
framing used by the web API lives in EventStreamSink and the chunk helpers
below.
"""

import json
import asyncio
from abc import ABC, abstractmethod
from typing import Optional, AsyncGenerator, Awaitable, List, Tuple
from loguru import logger


DONE_FRAME = "data: [DONE]\n\n"


def extract_text_from_chunk(chunk) -> Optional[str]:
    """
    Extract text content from provider streaming response chunks.
    Handles OpenAI chat-completion chunks, Anthropic stream events and the
    decoded JSON dicts of OpenAI-compatible SSE backends.

    Args:
        chunk: Streaming response chunk from provider

    Returns:
        Extracted text content or None
    """
    # Handle OpenAI Chat Completions API format
    if hasattr(chunk, 'choices') and chunk.choices:
        delta = getattr(chunk.choices[0], 'delta', None)
        return getattr(delta, 'content', None)

    # Handle Anthropic content_block_delta events
    if getattr(chunk, 'type', None) == 'content_block_delta':
        return getattr(chunk.delta, 'text', None)

    # Handle dictionary format (OpenAI-compatible SSE payloads)
    if isinstance(chunk, dict):
        choices = chunk.get('choices') or []
        if choices:
            choice = choices[0] or {}
            delta = choice.get('delta') or {}
            if 'content' in delta:
                return delta['content']
            message = choice.get('message') or {}
            return message.get('content')

    # Handle string format
    if isinstance(chunk, str):
        return chunk

    return None


def create_content_chunk(content: str, provider: str, model: str, chunk_type: str) -> str:
    """
    Create content chunk for Web API streaming.
    Returns formatted chunk for real-time frontend updates.
    """
    chunk_data = {
        "content": content,
        "provider": provider,
        "model": model,
        "type": chunk_type
    }
    return f"data: {json.dumps(chunk_data, ensure_ascii=False)}\n\n"


def create_error_chunk(message: str) -> str:
    """Create the terminal error chunk of a stream."""
    return f"data: {json.dumps({'error': message, 'type': 'error'}, ensure_ascii=False)}\n\n"


class StreamSink(ABC):
    """
    Receives text chunks in production order and one terminal signal.

    After ``fail`` or ``close`` the sink ignores anything else it is given,
    so no fragment can follow an error.
    """

    def __init__(self):
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    async def send(self, chunk: str) -> None:
        if self._finished:
            logger.debug("Dropping chunk sent after stream end")
            return
        await self._deliver(chunk)

    async def fail(self, message: str) -> None:
        if self._finished:
            return
        self._finished = True
        await self._terminate(message)

    async def close(self) -> None:
        if self._finished:
            return
        self._finished = True
        await self._terminate(None)

    @abstractmethod
    async def _deliver(self, chunk: str) -> None:
        """Hand one content chunk to the transport."""

    @abstractmethod
    async def _terminate(self, error: Optional[str]) -> None:
        """Signal end of stream, with an error message when it failed."""


class BufferedSink(StreamSink):
    """One-shot sink that keeps everything in memory."""

    def __init__(self):
        super().__init__()
        self.chunks: List[str] = []
        self.error: Optional[str] = None

    @property
    def text(self) -> str:
        return "".join(self.chunks)

    async def _deliver(self, chunk: str) -> None:
        self.chunks.append(chunk)

    async def _terminate(self, error: Optional[str]) -> None:
        self.error = error


class EventStreamSink(StreamSink):
    """
    Queue-backed sink rendered as a server-sent event stream.

    Each chunk becomes one ``data:`` frame as soon as it is produced; the stream
    ends with ``[DONE]`` or an error frame.
    """

    def __init__(self, provider: str, model: str):
        super().__init__()
        self.provider = provider
        self.model = model
        self._queue: "asyncio.Queue[Tuple[str, Optional[str]]]" = asyncio.Queue()

    async def _deliver(self, chunk: str) -> None:
        await self._queue.put(("chunk", chunk))

    async def _terminate(self, error: Optional[str]) -> None:
        if error is None:
            await self._queue.put(("done", None))
        else:
            await self._queue.put(("error", error))

    async def events(self) -> AsyncGenerator[str, None]:
        """Yield SSE frames until the terminal frame."""
        while True:
            kind, payload = await self._queue.get()
            if kind == "chunk":
                yield create_content_chunk(payload, self.provider, self.model, "chunk")
            elif kind == "error":
                yield create_error_chunk(payload)
                return
            else:
                yield DONE_FRAME
                return


async def relay_events(sink: EventStreamSink, producer: Awaitable[None]) -> AsyncGenerator[str, None]:
    """
    Run ``producer`` (which writes into ``sink``) and yield the sink's frames.

    If the consumer goes away before the stream ends, the producer task is
    cancelled so the in-flight backend call stops too.
    """
    task = asyncio.ensure_future(producer)
    try:
        async for frame in sink.events():
            yield frame
    finally:
        if not task.done():
            logger.info("Stream consumer disconnected, cancelling backend call")
            task.cancel()
