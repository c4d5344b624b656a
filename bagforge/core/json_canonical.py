"""
Deterministic JSON serialization for fixity reports.

Identical reports produce identical bytes regardless of dict ordering.
"""

from __future__ import annotations

from typing import Any

import orjson


def canonical_json_dumps(obj: Any, *, indent: bool = False) -> str:
    """
    Serialize object to canonical JSON string.

    Args:
        obj: JSON-compatible object, e.g. ``model_dump(mode="json")`` output.
        indent: If True, pretty-print with 2-space indentation.

    Returns:
        JSON string with sorted keys.

    Raises:
        TypeError: If the object contains a type orjson cannot serialize.

    Examples:
        >>> canonical_json_dumps({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    options = orjson.OPT_SORT_KEYS
    if indent:
        options |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=options).decode("utf-8")


def canonical_json_loads(json_str: str | bytes) -> Any:
    """Parse a JSON string."""
    return orjson.loads(json_str)
