"""
Conversion of arbitrary Python objects into the Universal Value tree.

Plain dicts, lists, tuples and scalars are walked here so that dict keys
keep their original type until they are rendered. Everything else (models,
dataclasses, enums, datetimes, UUIDs, sets, ...) goes through Pydantic's
generic serializer and its JSON-compatible output is mapped onto the closed
set of value variants.
"""

import math
from typing import Any, Optional

from loguru import logger
from pydantic_core import to_jsonable_python

from .types import (
    VARIANTS,
    Array,
    Bool,
    EncodeConfig,
    Null,
    Number,
    Object,
    String,
    Value,
)

_SCALAR_TYPES = (type(None), bool, int, float, str)


class ConversionError(ValueError):
    """
    Raised when an object cannot be represented as a Universal Value.

    For serializer failures the message is the upstream serializer's
    message, and the upstream exception is chained as ``__cause__``.
    """


def to_value(obj: Any, config: Optional[EncodeConfig] = None) -> Value:
    """
    Convert any serializable Python object into a Universal Value.

    Args:
        obj: Pydantic model, dataclass, dict, list, scalar, ... or a Value
        config: Conversion options (defaults to EncodeConfig())

    Returns:
        The equivalent value tree

    Raises:
        ConversionError: If the object (or something inside it) has no
            JSON representation, contains a reference cycle, or has dict
            keys that are unsupported or collide once stringified

    Example:
        >>> to_value({"id": 1, "tags": ["a"]})
        Object(fields=(('id', Number(value=1)), ('tags', Array(items=(String(value='a'),)))))
    """
    return _convert(obj, config or EncodeConfig(), set())


def _convert(obj: Any, config: EncodeConfig, active: set) -> Value:
    """Walk plain containers; hand anything else to the serializer."""
    if isinstance(obj, VARIANTS):
        return obj

    # Exact types: subclasses (IntEnum, str-based enums, ...) go to Pydantic
    if type(obj) in _SCALAR_TYPES:
        return _from_scalar(obj)

    if isinstance(obj, (dict, list, tuple)):
        if id(obj) in active:
            raise ConversionError("Circular reference detected (id repeated)")
        active.add(id(obj))
        try:
            if isinstance(obj, dict):
                return _convert_dict(obj, config, active)
            return Array(tuple(_convert(item, config, active) for item in obj))
        finally:
            active.discard(id(obj))

    try:
        jsonable = to_jsonable_python(
            obj,
            by_alias=config.by_alias,
            exclude_none=config.exclude_none,
        )
    except ValueError as e:
        # PydanticSerializationError and cycle detection both land here
        logger.debug("Conversion of {} failed: {}", type(obj).__name__, e)
        raise ConversionError(str(e)) from e

    return _convert(jsonable, config, active)


def _from_scalar(data: Any) -> Value:
    if data is None:
        return Null()
    if isinstance(data, bool):
        return Bool(data)
    if isinstance(data, int):
        return Number(data)
    if isinstance(data, float):
        if math.isnan(data) or math.isinf(data):
            return Null()
        return Number(data)
    return String(data)


def _convert_dict(data: dict, config: EncodeConfig, active: set) -> Object:
    pairs = []
    for key, val in data.items():
        if config.exclude_none and val is None:
            continue
        pairs.append((_key_to_str(key), _convert(val, config, active)))
    if config.sort_keys:
        pairs.sort(key=lambda pair: pair[0])
    try:
        return Object.from_pairs(pairs)
    except ValueError as e:
        # e.g. {1: ..., "1": ...} collapsing onto the same key
        logger.debug("Object keys collide after stringification: {}", e)
        raise ConversionError(str(e)) from e


def _key_to_str(key: Any) -> str:
    """Render a dict key the way the matching scalar would encode."""
    if isinstance(key, str):
        return str.__str__(key)
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, int):
        return int.__repr__(key)
    if isinstance(key, float):
        return float.__repr__(key)
    raise ConversionError(f"Unsupported object key type: {type(key).__name__}")


def from_value(value: Value) -> Any:
    """
    Unwrap a value tree into plain JSON-compatible Python data.

    Used to render the same tree as standard JSON for comparison.
    """
    if isinstance(value, Null):
        return None
    if isinstance(value, (Bool, Number, String)):
        return value.value
    if isinstance(value, Array):
        return [from_value(item) for item in value.items]
    if isinstance(value, Object):
        return {key: from_value(val) for key, val in value.fields}
    raise TypeError(f"Not a compact value: {type(value).__name__}")
