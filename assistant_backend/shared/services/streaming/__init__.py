"""
Stream relay shared by every AI endpoint.
"""

from .streaming_utils import (
    DONE_FRAME,
    StreamSink,
    BufferedSink,
    EventStreamSink,
    extract_text_from_chunk,
    create_content_chunk,
    create_error_chunk,
    relay_events
)

__all__ = [
    "DONE_FRAME",
    "StreamSink",
    "BufferedSink",
    "EventStreamSink",
    "extract_text_from_chunk",
    "create_content_chunk",
    "create_error_chunk",
    "relay_events"
]
