"""
Context injection for input optimization.

Converts context data to the compact form before injecting it into prompts.
"""

import json
from copy import deepcopy
from typing import Any, Optional

from loguru import logger

from .conversion import from_value, to_value
from .encoder import encode
from .prompts import COMPACT_INPUT_PROMPT
from .types import EncodeConfig


def _is_structured(value: Any) -> bool:
    """Lists, dicts and anything that converts to one (models, dataclasses)."""
    return not isinstance(value, (str, int, float, bool)) and value is not None


def format_data(
    data: Any,
    compact: bool = True,
    config: Optional[EncodeConfig] = None
) -> str:
    """
    Format data in compact form (if compact) or as whitespace-free JSON.

    Args:
        data: Any serializable data
        compact: If True, use the compact form
        config: Conversion options

    Returns:
        Formatted string representation

    Example:
        >>> format_data({"name": "Alice"})
        '{name:Alice}'
        >>> format_data({"name": "Alice"}, compact=False)
        '{"name":"Alice"}'
    """
    value = to_value(data, config)
    if compact:
        return encode(value)
    return json.dumps(from_value(value), separators=(',', ':'), ensure_ascii=False)


def inject_context(
    messages: list[dict],
    context: dict[str, Any],
    compact: bool = True,
    config: Optional[EncodeConfig] = None
) -> list[dict]:
    """
    Replace {placeholder} in messages with context data.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        context: Dict mapping placeholder names to data values
        compact: If True, render data in compact form, else as JSON
        config: Conversion options

    Returns:
        New list of messages with placeholders replaced

    Raises:
        ConversionError: If a context value cannot be serialized

    Example:
        >>> messages = [{"role": "user", "content": "Analyze: {data}"}]
        >>> context = {"data": [{"id": 1, "name": "Alice"}]}
        >>> inject_context(messages, context)
        [{'role': 'user', 'content': 'Analyze: [{id:1,name:Alice}]'}]
    """
    # Deep copy to avoid mutating original
    messages = deepcopy(messages)

    replaced = 0
    for key, value in context.items():
        placeholder = f"{{{key}}}"
        formatted = format_data(value, compact=compact, config=config)

        for msg in messages:
            content = msg.get("content")
            if isinstance(content, str) and placeholder in content:
                msg["content"] = content.replace(placeholder, formatted)
                replaced += 1

    logger.debug(
        "Injected {} context value(s) into {} message(s) as {}",
        len(context),
        replaced,
        "compact" if compact else "json",
    )
    return messages


def build_system_prompt(
    instructions: Optional[str] = None,
    has_compact_context: bool = False
) -> str:
    """
    Build the system prompt for the LLM.

    Args:
        instructions: Caller's own system instructions
        has_compact_context: Whether the messages carry compact data

    Returns:
        System prompt string (empty if there is nothing to say)
    """
    parts = []

    if instructions:
        parts.append(instructions.strip())

    if has_compact_context:
        parts.append(COMPACT_INPUT_PROMPT.strip())

    return "\n\n".join(parts)


def prepare_messages(
    messages: list[dict],
    context: Optional[dict[str, Any]] = None,
    instructions: Optional[str] = None,
    compact: bool = True,
    config: Optional[EncodeConfig] = None
) -> list[dict]:
    """
    Inject context and prepend a system message describing the format.

    Example:
        >>> prepare_messages(
        ...     [{"role": "user", "content": "Summarize: {rows}"}],
        ...     context={"rows": rows},
        ...     instructions="You are a data analyst.",
        ... )
    """
    has_compact_context = False

    if context:
        messages = inject_context(messages, context, compact=compact, config=config)
        has_compact_context = compact and any(
            _is_structured(v) for v in context.values()
        )
    else:
        messages = deepcopy(messages)

    system_prompt = build_system_prompt(
        instructions=instructions,
        has_compact_context=has_compact_context
    )
    if not system_prompt:
        return messages

    return [{"role": "system", "content": system_prompt}] + messages
