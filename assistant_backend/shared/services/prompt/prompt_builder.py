"""
Prompt Builder - maps a writing operation and its fields to a prompt.

Pure functions only: no network, no session state. Conversation history is
spliced in by the providers, not here.
"""

from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

from ...core.exceptions import UnsupportedOperationError
from ...models.enums import Operation


class PromptFields(BaseModel):
    """Operation-specific inputs taken from a unified AI request."""
    model_config = ConfigDict(frozen=True)

    document_summary: str = ""
    user_requirement: str = ""
    selected_text: str = ""
    context_text: str = ""
    # Reserved: accepted but not used to splice context around the caret.
    cursor_position: Optional[int] = None


_SYSTEM_INSTRUCTIONS = {
    Operation.CONTINUE.value: "You are a writing assistant. Continue the content directly, keeping the same style.",
    Operation.POLISH.value: "You are a writing assistant. Output only the polished text.",
    Operation.SUMMARIZE.value: "You are a writing assistant. Output only the summary.",
}

_DEFAULT_SYSTEM_INSTRUCTION = "You are a writing assistant. Process the text directly."


def system_instruction(operation: str) -> str:
    """
    System instruction for an operation name.

    Total over all strings: expand, generate, chat and unknown names fall back
    to the generic instruction.
    """
    return _SYSTEM_INSTRUCTIONS.get(operation, _DEFAULT_SYSTEM_INSTRUCTION)


def _section(label: str, value: str) -> str:
    return f"{label}: {value}"


def _join(*sections: str) -> str:
    return "\n\n".join(sections)


def build_continue_prompt(fields: PromptFields) -> str:
    return _join(
        _section("Continuation requirement", fields.user_requirement),
        _section("Context", fields.context_text),
        "Continue the text directly, keeping the same style.",
    )


def build_polish_prompt(fields: PromptFields) -> str:
    return _join(
        _section("Polishing requirement", fields.user_requirement),
        _section("Original text", fields.selected_text),
        "Output only the polished text.",
    )


def build_summarize_prompt(fields: PromptFields) -> str:
    return _join(
        _section("Summary requirement", fields.user_requirement),
        _section("Original text", fields.selected_text),
        "Output only the summary, written as natural paragraphs.",
    )


def build_expand_prompt(fields: PromptFields) -> str:
    return _join(
        _section("Expansion requirement", fields.user_requirement),
        _section("Original text", fields.selected_text),
        _section("Context", fields.context_text),
        "Output only the expanded content.",
    )


def build_generate_prompt(fields: PromptFields) -> str:
    return _join(
        _section("Generation requirement", fields.user_requirement),
        _section("Document summary", fields.document_summary),
        _section("Context", fields.context_text),
        "Output only the generated content.",
    )


_BUILDERS = {
    Operation.CONTINUE: build_continue_prompt,
    Operation.POLISH: build_polish_prompt,
    Operation.SUMMARIZE: build_summarize_prompt,
    Operation.EXPAND: build_expand_prompt,
    Operation.GENERATE: build_generate_prompt,
}


def parse_operation(function_type: Union[str, Operation]) -> Operation:
    """
    Validate a functionType value.

    Raises:
        UnsupportedOperationError: for anything outside the five structured operations
    """
    try:
        return Operation(function_type)
    except ValueError:
        raise UnsupportedOperationError(str(function_type)) from None


def build_prompt(operation: Union[str, Operation], fields: PromptFields) -> str:
    """
    Build the user prompt for a structured writing operation.

    Missing fields yield empty sections rather than an error.

    Args:
        operation: One of continue, polish, summarize, expand, generate
        fields: Operation inputs

    Returns:
        Prompt text

    Raises:
        UnsupportedOperationError: If the operation is unknown
    """
    return _BUILDERS[parse_operation(operation)](fields)
