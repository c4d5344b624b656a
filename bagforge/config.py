"""
Settings for formatting, hashing and verification.

Settings are optional everywhere; defaults follow the BagIt recommendations.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field

from bagforge.core.field_format import CONTINUATION_INDENT, LINE_WIDTH
from bagforge.hashing.registry import DEFAULT_CHUNK_SIZE


class BagSettings(BaseModel):
    """Tunables shared by manifests, tag files and the CLI."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    line_width: int = Field(default=LINE_WIDTH, ge=1, description="Tag file wrap column")
    continuation_indent: int = Field(
        default=CONTINUATION_INDENT, ge=0, description="Spaces before continuation lines"
    )
    chunk_size: int = Field(
        default=DEFAULT_CHUNK_SIZE, ge=1, description="Read size when hashing files"
    )
    verify_workers: int = Field(
        default=1, ge=1, description="Threads used to hash entries during verification"
    )
    encoding: str = Field(default="utf-8", description="Text encoding for written files")

    @classmethod
    def load(cls, path: Path) -> BagSettings:
        """
        Load settings from a YAML file.

        An empty file yields the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            pydantic.ValidationError: If a value is invalid.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


DEFAULT_SETTINGS = BagSettings()
