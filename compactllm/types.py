"""
Type definitions for compactllm.

Includes the Universal Value tree the encoder walks, plus dataclasses for
encoding configuration and size reporting.
"""

import os
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Null:
    """The JSON ``null`` value."""


@dataclass(frozen=True)
class Bool:
    """A boolean."""
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool expects bool, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Number:
    """
    A number, keeping the source representation.

    Integers render without a decimal point, floats in their shortest
    round-trippable form.
    """
    value: Union[int, float]

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(
                f"Number expects int or float, got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class String:
    """A sequence of Unicode characters."""
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"String expects str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Array:
    """An ordered sequence of values."""
    items: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Object:
    """
    An ordered mapping of string keys to values.

    Fields are stored as ``(key, value)`` pairs in emission order.
    Keys must be unique.

    Example:
        >>> Object.from_pairs([("id", Number(1)), ("name", String("Alice"))])
    """
    fields: tuple = ()

    def __post_init__(self):
        pairs = tuple((key, value) for key, value in self.fields)
        seen = set()
        for key, _ in pairs:
            if key in seen:
                raise ValueError(f"Duplicate object key: {key!r}")
            seen.add(key)
        object.__setattr__(self, "fields", pairs)

    @classmethod
    def from_pairs(cls, pairs) -> "Object":
        """Build an Object from any iterable of (key, value) pairs."""
        return cls(fields=tuple(pairs))

    def keys(self) -> list[str]:
        return [key for key, _ in self.fields]


Value = Union[Null, Bool, Number, String, Array, Object]

VARIANTS = (Null, Bool, Number, String, Array, Object)


_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError(
        f"Invalid {name} environment variable: {raw!r} "
        f"(expected one of: {', '.join(sorted(_TRUTHY | _FALSY))})"
    )


@dataclass
class EncodeConfig:
    """
    Configuration for converting Python objects into the value tree.

    Attributes:
        sort_keys: Emit object keys sorted instead of in source order
        by_alias: Use Pydantic field aliases as keys
        exclude_none: Drop fields whose value is None

    Example:
        >>> # Stable output for caching or diffing
        >>> config = EncodeConfig(sort_keys=True)

        >>> # Read COMPACTLLM_SORT_KEYS, COMPACTLLM_BY_ALIAS, COMPACTLLM_EXCLUDE_NONE
        >>> config = EncodeConfig.from_env()

        >>> to_compact_string(data, config=config)
    """
    sort_keys: bool = False
    by_alias: bool = False
    exclude_none: bool = False

    @classmethod
    def from_env(cls) -> "EncodeConfig":
        """Build a config from ``COMPACTLLM_*`` environment variables."""
        return cls(
            sort_keys=_env_flag("COMPACTLLM_SORT_KEYS", False),
            by_alias=_env_flag("COMPACTLLM_BY_ALIAS", False),
            exclude_none=_env_flag("COMPACTLLM_EXCLUDE_NONE", False),
        )


@dataclass
class SizeReport:
    """
    Size comparison between compact JSON and the compact form.

    Attributes:
        json_chars: Characters in whitespace-free JSON
        compact_chars: Characters in the compact form
        json_bytes: UTF-8 bytes in whitespace-free JSON
        compact_bytes: UTF-8 bytes in the compact form
    """
    json_chars: int = 0
    compact_chars: int = 0
    json_bytes: int = 0
    compact_bytes: int = 0

    @property
    def saved_chars(self) -> int:
        return self.json_chars - self.compact_chars

    @property
    def savings_ratio(self) -> float:
        """Fraction of JSON characters saved (0.0 for empty input)."""
        if self.json_chars == 0:
            return 0.0
        return self.saved_chars / self.json_chars

    def __add__(self, other: "SizeReport") -> "SizeReport":
        """Add two reports together (for accumulating across payloads)."""
        return SizeReport(
            json_chars=self.json_chars + other.json_chars,
            compact_chars=self.compact_chars + other.compact_chars,
            json_bytes=self.json_bytes + other.json_bytes,
            compact_bytes=self.compact_bytes + other.compact_bytes,
        )
