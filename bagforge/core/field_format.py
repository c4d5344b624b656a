"""
Tag field formatting.

Wraps a key/value pair at a fixed column width with indented continuation
lines, as recommended for BagIt tag files.
"""

from __future__ import annotations

LINE_WIDTH = 79
CONTINUATION_INDENT = 3


def format_field(
    key: str,
    value: str,
    *,
    width: int = LINE_WIDTH,
    indent: int = CONTINUATION_INDENT,
) -> str:
    """
    Format a tag field as ``"<key>: <value>"`` wrapped at ``width`` columns.

    Words are whitespace-delimited and joined by single spaces. When the
    next word would push the current line past ``width``, a newline and
    ``indent`` spaces are inserted first. Words are never split: the first
    word on a line is always placed there, even if it overflows.

    Args:
        key: Tag key.
        value: Tag value.
        width: Maximum physical line length.
        indent: Number of spaces before each continuation line.

    Returns:
        Formatted field without a trailing newline.

    Examples:
        >>> format_field("Source-Organization", "Example Archive")
        'Source-Organization: Example Archive'
    """
    words = value.split()
    if not words:
        return f"{key}:"

    padding = " " * indent
    parts = [f"{key}: ", words[0]]
    line_len = len(key) + 2 + len(words[0])

    for word in words[1:]:
        if line_len + 1 + len(word) > width:
            parts.append("\n")
            parts.append(padding)
            parts.append(word)
            line_len = indent + len(word)
        else:
            parts.append(" ")
            parts.append(word)
            line_len += 1 + len(word)

    return "".join(parts)
