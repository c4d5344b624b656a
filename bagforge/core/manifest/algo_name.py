"""Derive a manifest's hash algorithm from its filename."""

from __future__ import annotations

import re
from pathlib import Path

from bagforge.core.errors import AlgorithmError

# Greedy prefix so the token starts after the last hyphen.
ALGO_NAME_PATTERN = re.compile(r"^(.*-)(.*)(\.txt)$")


def extract_algorithm(filename: str | Path) -> str:
    """
    Extract the algorithm token from a ``<prefix>-<algo>.txt`` filename.

    Only the base name is considered.

    Args:
        filename: Manifest filename or path.

    Returns:
        The algorithm token, e.g. ``"sha256"``.

    Raises:
        AlgorithmError: If the name has no hyphen, no ``.txt`` suffix,
            or an empty token.

    Examples:
        >>> extract_algorithm("tagmanifest-sha256.txt")
        'sha256'
        >>> extract_algorithm("bag/manifest-md5.txt")
        'md5'
    """
    name = Path(filename).name
    match = ALGO_NAME_PATTERN.match(name)
    if match is None or not match.group(2):
        raise AlgorithmError(
            f"Unable to determine algorithm from filename: {name}",
        )
    return match.group(2)
