"""
Tests for context injection and prompt assembly.
"""

from copy import deepcopy
from unittest.mock import patch

import pytest
from pydantic import BaseModel

from compactllm import ConversionError, EncodeConfig, format_data, inject_context, prepare_messages
from compactllm.context import build_system_prompt
from compactllm.prompts import COMPACT_INPUT_PROMPT


class Sale(BaseModel):
    month: str
    revenue: int


SALES = [
    {"month": "January", "revenue": 10000},
    {"month": "February", "revenue": 15000},
]


class TestFormatData:
    """Tests for format_data."""

    def test_compact(self):
        """Test that structured data formats in compact form."""
        assert format_data(SALES) == "[{month:January,revenue:10000},{month:February,revenue:15000}]"

    def test_json(self):
        """Test that compact=False gives whitespace-free JSON."""
        assert format_data(SALES, compact=False) == (
            '[{"month":"January","revenue":10000},{"month":"February","revenue":15000}]'
        )

    def test_scalars(self):
        """Test that scalars are unquoted in compact form and JSON otherwise."""
        assert format_data("text") == "text"
        assert format_data("text", compact=False) == '"text"'
        assert format_data(None) == "null"
        assert format_data(None, compact=False) == "null"
        assert format_data(42) == "42"

    def test_model(self):
        """Test that a Pydantic model formats through its fields."""
        assert format_data(Sale(month="March", revenue=12000)) == "{month:March,revenue:12000}"

    def test_config_applies(self):
        """Test that the config reaches the conversion step."""
        result = format_data({"b": 1, "a": 2}, config=EncodeConfig(sort_keys=True))
        assert result == "{a:2,b:1}"


class TestInjectContext:
    """Tests for inject_context."""

    def test_replaces_placeholders(self):
        """Test that placeholders are replaced with compact data."""
        messages = [{"role": "user", "content": "Analyze this sales data: {data}"}]

        result = inject_context(messages, {"data": SALES})

        assert result[0]["content"] == (
            "Analyze this sales data: "
            "[{month:January,revenue:10000},{month:February,revenue:15000}]"
        )

    def test_does_not_mutate_input(self):
        """Test that the caller's messages are not modified."""
        messages = [{"role": "user", "content": "Data: {data}"}]
        original = deepcopy(messages)

        inject_context(messages, {"data": {"a": 1}})

        assert messages == original

    def test_multiple_messages_and_placeholders(self):
        """Test that every placeholder in every message is replaced."""
        messages = [
            {"role": "system", "content": "Region: {region}"},
            {"role": "user", "content": "Rows {rows} for {region}"},
        ]

        result = inject_context(messages, {"region": "EU", "rows": [1, 2]})

        assert result[0]["content"] == "Region: EU"
        assert result[1]["content"] == "Rows [1,2] for EU"

    def test_non_string_content_passes_through(self):
        """Test that non-string content is left alone."""
        messages = [{"role": "user", "content": [{"type": "text", "text": "{data}"}]}]

        result = inject_context(messages, {"data": [1]})

        assert result == messages

    def test_json_mode(self):
        """Test that compact=False injects JSON."""
        messages = [{"role": "user", "content": "{data}"}]

        result = inject_context(messages, {"data": {"a": 1}}, compact=False)

        assert result[0]["content"] == '{"a":1}'

    def test_conversion_error_propagates(self):
        """Test that unconvertible context raises ConversionError."""
        with pytest.raises(ConversionError):
            inject_context([{"role": "user", "content": "{x}"}], {"x": object()})


class TestPrepareMessages:
    """Tests for system prompt assembly."""

    def test_build_system_prompt(self):
        """Test that the format prompt is added only for compact context."""
        assert build_system_prompt() == ""
        assert build_system_prompt("Be brief.") == "Be brief."

        prompt = build_system_prompt("Be brief.", has_compact_context=True)
        assert prompt.startswith("Be brief.\n\n")
        assert COMPACT_INPUT_PROMPT.strip() in prompt

    def test_adds_format_prompt_for_structured_context(self):
        """Test that structured context gets a system prompt describing the format."""
        messages = [{"role": "user", "content": "Summarize: {rows}"}]

        result = prepare_messages(messages, context={"rows": SALES}, instructions="You are an analyst.")

        assert result[0]["role"] == "system"
        assert result[0]["content"].startswith("You are an analyst.")
        assert COMPACT_INPUT_PROMPT.strip() in result[0]["content"]
        assert result[1]["content"].startswith("Summarize: [{month:January")

    def test_no_format_prompt_for_scalar_context(self):
        """Test that scalar-only context adds no system message."""
        messages = [{"role": "user", "content": "Hello {name}"}]

        result = prepare_messages(messages, context={"name": "Alice"})

        assert result == [{"role": "user", "content": "Hello Alice"}]

    def test_no_format_prompt_in_json_mode(self):
        """Test that JSON mode keeps only the caller's instructions."""
        messages = [{"role": "user", "content": "{rows}"}]

        result = prepare_messages(messages, context={"rows": SALES}, instructions="Hi", compact=False)

        assert result[0] == {"role": "system", "content": "Hi"}
        assert result[1]["content"].startswith('[{"month"')

    def test_messages_copied_once_with_context(self):
        """Test that prepare_messages leaves copying to inject_context."""
        messages = [{"role": "user", "content": "{rows}"}]

        with patch("compactllm.context.deepcopy", wraps=deepcopy) as copy_spy:
            prepare_messages(messages, context={"rows": SALES})

        assert copy_spy.call_count == 1

    def test_messages_copied_without_context(self):
        """Test that the result is a copy even with nothing to inject."""
        messages = [{"role": "user", "content": "Hi"}]

        result = prepare_messages(messages)

        assert result == messages
        assert result[0] is not messages[0]
