"""
Per-session conversation state.
"""

from .conversation_store import ConversationStore, ConversationHistory, DEFAULT_MAX_TURNS

__all__ = [
    "ConversationStore",
    "ConversationHistory",
    "DEFAULT_MAX_TURNS"
]
