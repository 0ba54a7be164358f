"""
compactllm - Compact, quote-free serialization of structured data for LLMs

Renders any JSON-like value (Pydantic models, dataclasses, dicts, lists)
without quotes or whitespace, escaping only line breaks:

    {id:123,name:John Doe,tags:[tag1,tag2],active:true}

The output is meant to be read by a language model, not parsed back.

Basic usage:
    >>> from compactllm import to_compact_string
    >>> from pydantic import BaseModel
    >>>
    >>> class User(BaseModel):
    ...     name: str
    ...     age: int
    >>>
    >>> to_compact_string(User(name="Alice", age=30))
    '{name:Alice,age:30}'

Logging goes through loguru and is disabled by default; enable it with
``logger.enable("compactllm")``.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from loguru import logger

from .conversion import ConversionError, from_value, to_value
from .encoder import encode, escape_text, to_compact_string
from .context import format_data, inject_context, prepare_messages
from .stats import measure
from .types import (
    Array,
    Bool,
    EncodeConfig,
    Null,
    Number,
    Object,
    SizeReport,
    String,
    Value,
)

logger.disable(__name__)

__all__ = [
    "to_compact_string",
    "encode",
    "escape_text",
    "to_value",
    "from_value",
    "ConversionError",
    "format_data",
    "inject_context",
    "prepare_messages",
    "measure",
    "EncodeConfig",
    "SizeReport",
    "Value",
    "Null",
    "Bool",
    "Number",
    "String",
    "Array",
    "Object",
]
