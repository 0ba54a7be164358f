"""
Size comparison between standard JSON and the compact form.
"""

import json
from typing import Any, Optional

from .conversion import from_value, to_value
from .encoder import encode
from .types import EncodeConfig, SizeReport


def measure(obj: Any, config: Optional[EncodeConfig] = None) -> SizeReport:
    """
    Measure how much smaller the compact form is than whitespace-free JSON.

    Both renderings come from the same value tree, so config options
    (sort_keys, exclude_none, ...) apply to both.

    Example:
        >>> report = measure([{"id": 1, "name": "Alice"}])
        >>> report.json_chars, report.compact_chars
        (25, 19)
    """
    value = to_value(obj, config)
    compact = encode(value)
    as_json = json.dumps(from_value(value), separators=(",", ":"), ensure_ascii=False)

    return SizeReport(
        json_chars=len(as_json),
        compact_chars=len(compact),
        json_bytes=len(as_json.encode("utf-8")),
        compact_bytes=len(compact.encode("utf-8")),
    )
