"""Manifest system: line grammar, algorithm names, manifests and fixity reports."""

from bagforge.core.manifest.algo_name import extract_algorithm
from bagforge.core.manifest.line_grammar import (
    ParseOutcome,
    parse_line,
    parse_manifest_data,
    render_line,
    render_manifest,
)
from bagforge.core.manifest.manifest import LoadOutcome, Manifest
from bagforge.core.manifest.report import FailureKind, FixityFailure, FixityReport

__all__ = [
    "extract_algorithm",
    "ParseOutcome",
    "parse_line",
    "parse_manifest_data",
    "render_line",
    "render_manifest",
    "LoadOutcome",
    "Manifest",
    "FailureKind",
    "FixityFailure",
    "FixityReport",
]
