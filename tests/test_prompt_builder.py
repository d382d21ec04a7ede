"""
Tests for prompt construction and system instructions.
"""

import pytest

from assistant_backend.shared.core.exceptions import UnsupportedOperationError
from assistant_backend.shared.models.enums import Operation
from assistant_backend.shared.services.prompt import (
    PromptFields,
    build_prompt,
    parse_operation,
    system_instruction,
)


class TestBuildPrompt:
    """Prompt sections per operation."""

    def test_polish_prompt_contains_requirement_then_original_text(self):
        fields = PromptFields(user_requirement="make formal", selected_text="hey there")
        prompt = build_prompt("polish", fields)

        assert "make formal" in prompt
        assert "hey there" in prompt
        assert prompt.index("make formal") < prompt.index("hey there")
        assert "polished text" in prompt

    def test_continue_prompt_uses_context(self):
        fields = PromptFields(user_requirement="keep going", context_text="Once upon a time")
        prompt = build_prompt(Operation.CONTINUE, fields)

        assert prompt.index("keep going") < prompt.index("Once upon a time")
        assert "same style" in prompt

    def test_summarize_prompt_contains_original_text(self):
        prompt = build_prompt("summarize", PromptFields(user_requirement="short", selected_text="long text"))
        assert "long text" in prompt
        assert "summary" in prompt

    def test_expand_prompt_orders_sections(self):
        fields = PromptFields(user_requirement="REQ", selected_text="SEL", context_text="CTX")
        prompt = build_prompt("expand", fields)

        assert prompt.index("REQ") < prompt.index("SEL") < prompt.index("CTX")

    def test_generate_prompt_includes_document_summary(self):
        fields = PromptFields(user_requirement="REQ", document_summary="DOC", context_text="CTX")
        prompt = build_prompt("generate", fields)

        assert prompt.index("REQ") < prompt.index("DOC") < prompt.index("CTX")

    def test_sections_are_separated_by_blank_lines(self):
        prompt = build_prompt("polish", PromptFields(user_requirement="r", selected_text="s"))
        assert prompt.split("\n\n")[:2] == ["Polishing requirement: r", "Original text: s"]

    def test_missing_fields_produce_empty_sections(self):
        """Leniency: a polish request without selected text still builds."""
        prompt = build_prompt("polish", PromptFields(user_requirement="fix"))
        assert "Original text: " in prompt

    def test_cursor_position_is_ignored(self):
        with_cursor = PromptFields(user_requirement="r", context_text="c", cursor_position=3)
        without_cursor = PromptFields(user_requirement="r", context_text="c")
        assert build_prompt("continue", with_cursor) == build_prompt("continue", without_cursor)

    def test_unknown_operation_raises(self):
        with pytest.raises(UnsupportedOperationError) as exc_info:
            build_prompt("translate", PromptFields())
        assert exc_info.value.operation == "translate"
        assert exc_info.value.status_code == 400


class TestSystemInstruction:
    """Operation-keyed system instructions."""

    @pytest.mark.parametrize("operation", ["continue", "polish", "summarize"])
    def test_specific_instructions(self, operation):
        assert system_instruction(operation) != system_instruction("anything-else")

    @pytest.mark.parametrize("operation", ["expand", "generate", "chat", "nonsense", ""])
    def test_fallback_is_total(self, operation):
        assert system_instruction(operation) == "You are a writing assistant. Process the text directly."

    def test_parse_operation_accepts_enum_values(self):
        assert parse_operation("summarize") is Operation.SUMMARIZE
