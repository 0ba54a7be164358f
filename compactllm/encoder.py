"""
Compact encoder.

Renders a Universal Value tree as unquoted, whitespace-free text for LLM
prompts: {id:123,name:John Doe,tags:[tag1,tag2],active:true}

Only line feeds and carriage returns are escaped. Structural characters
inside strings and keys pass through as-is, so the output is meant to be
read, not parsed back.
"""

from typing import Any, Optional

from .conversion import to_value
from .types import Array, Bool, EncodeConfig, Null, Number, Object, String, Value


def to_compact_string(obj: Any, config: Optional[EncodeConfig] = None) -> str:
    """
    Serialize any object to the compact form.

    Args:
        obj: Anything convertible to a Universal Value (models, dicts, ...)
        config: Conversion options

    Returns:
        Compact string

    Raises:
        ConversionError: If the object cannot be converted; nothing is
            rendered in that case

    Example:
        >>> to_compact_string({"id": 123, "tags": ["a", "b"], "active": True})
        '{id:123,tags:[a,b],active:true}'
    """
    return encode(to_value(obj, config))


def encode(value: Value) -> str:
    """
    Encode a Universal Value.

    Total over the six value variants; never fails for a well-formed tree.
    """
    out: list[str] = []
    _write_value(value, out)
    return "".join(out)


def escape_text(text: str) -> str:
    """Escape line feeds and carriage returns as \\n and \\r."""
    return text.replace("\n", "\\n").replace("\r", "\\r")


def format_number(number: Number) -> str:
    if isinstance(number.value, float):
        return repr(number.value)
    return str(number.value)


def _write_value(value: Value, out: list[str]) -> None:
    if isinstance(value, Null):
        out.append("null")
    elif isinstance(value, Bool):
        out.append("true" if value.value else "false")
    elif isinstance(value, Number):
        out.append(format_number(value))
    elif isinstance(value, String):
        out.append(escape_text(value.value))
    elif isinstance(value, Array):
        out.append("[")
        for i, item in enumerate(value.items):
            if i > 0:
                out.append(",")
            _write_value(item, out)
        out.append("]")
    elif isinstance(value, Object):
        out.append("{")
        for i, (key, val) in enumerate(value.fields):
            if i > 0:
                out.append(",")
            out.append(escape_text(key))
            out.append(":")
            _write_value(val, out)
        out.append("}")
    else:
        raise TypeError(f"Not a compact value: {type(value).__name__}")
