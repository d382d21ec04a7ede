"""
Enums shared by providers and the orchestration layer.
"""

from enum import Enum


class Provider(Enum):
    """LLM provider enumeration."""
    MOCK = "mock"
    DEEPSEEK = "deepseek"
    TONGYI = "tongyi"
    WENXIN = "wenxin"
    ZHIPU = "zhipu"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class Operation(str, Enum):
    """Structured writing operations accepted by the unified endpoint."""
    CONTINUE = "continue"
    POLISH = "polish"
    SUMMARIZE = "summarize"
    EXPAND = "expand"
    GENERATE = "generate"


class Role(str, Enum):
    """Conversation message roles."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


# Operation name used for free-form dialogue. It never reaches PromptBuilder,
# only the system instruction lookup.
CHAT_OPERATION = "chat"
