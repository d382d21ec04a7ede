"""
Prompt construction for writing operations.
"""

from .prompt_builder import (
    PromptFields,
    build_prompt,
    parse_operation,
    system_instruction
)

__all__ = [
    "PromptFields",
    "build_prompt",
    "parse_operation",
    "system_instruction"
]
