"""
Mock provider for development and tests. Never touches the network.
"""

from typing import Sequence
from loguru import logger

from .base import BaseProvider
from ..models.enums import Provider, Operation, Role
from ..models.internal import Message


_LABELS = {
    Operation.CONTINUE.value: "continue",
    Operation.POLISH.value: "polish",
    Operation.SUMMARIZE.value: "summary",
}


class MockProvider(BaseProvider):
    """
    Echoes the last user message back, tagged with the operation.

    Keeps conversation history like a real multi-turn backend so session
    behaviour can be exercised without credentials.
    """

    model_provider = Provider.MOCK
    supports_conversation = True

    display_name = "Mock Model"
    default_model = "mock-model"
    description = "Local echo model for development and testing"

    def is_available(self) -> bool:
        return True

    async def send_message_non_streaming(self, messages: Sequence[Message], operation: str) -> str:
        content = next((m.content for m in reversed(messages) if m.role == Role.USER), "")
        label = _LABELS.get(operation, operation)
        logger.debug(f"Mock provider answering {label} request ({len(messages)} messages)")
        return f"[mock {label}] {content}"
