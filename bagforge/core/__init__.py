"""Core utilities: errors, field formatting, canonical JSON."""

from bagforge.core.errors import (
    AlgorithmError,
    BagError,
    BagIOError,
    FixityError,
    ParseError,
    PathError,
)
from bagforge.core.field_format import format_field
from bagforge.core.json_canonical import canonical_json_dumps, canonical_json_loads

__all__ = [
    "AlgorithmError",
    "BagError",
    "BagIOError",
    "FixityError",
    "ParseError",
    "PathError",
    "format_field",
    "canonical_json_dumps",
    "canonical_json_loads",
]
