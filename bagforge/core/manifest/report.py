"""
Fixity report schema.

Summarises a verification run so it can be printed or stored.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from bagforge.core.errors import BagError, BagIOError, FixityError
from bagforge.core.json_canonical import canonical_json_dumps


class FailureKind(str, Enum):
    """Kind of verification failure."""

    MISMATCH = "mismatch"
    IO_ERROR = "io_error"
    OTHER = "other"


class FixityFailure(BaseModel):
    """One failed entry."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind = Field(description="Failure kind")
    path: str | None = Field(default=None, description="Entry path, if known")
    expected: str | None = Field(default=None, description="Recorded checksum")
    actual: str | None = Field(default=None, description="Computed checksum")
    message: str = Field(description="Error message")

    @classmethod
    def from_error(cls, error: BagError) -> FixityFailure:
        """Build a failure record from a verification error."""
        if isinstance(error, FixityError):
            return cls(
                kind=FailureKind.MISMATCH,
                path=error.path,
                expected=error.expected,
                actual=error.actual,
                message=str(error),
            )
        if isinstance(error, BagIOError):
            return cls(kind=FailureKind.IO_ERROR, path=error.path, message=str(error))
        return cls(kind=FailureKind.OTHER, message=str(error))


class FixityReport(BaseModel):
    """Result of verifying one manifest."""

    model_config = ConfigDict(frozen=True)

    manifest: str = Field(description="Manifest path")
    algorithm: str = Field(description="Hash algorithm")
    checked: int = Field(description="Number of entries checked")
    failures: list[FixityFailure] = Field(default_factory=list)
    verified_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def ok(self) -> bool:
        """True if every entry verified."""
        return not self.failures

    @classmethod
    def build(
        cls,
        manifest: str,
        algorithm: str,
        checked: int,
        errors: list[BagError],
    ) -> FixityReport:
        """Create a report from the errors returned by verification."""
        return cls(
            manifest=manifest,
            algorithm=algorithm,
            checked=checked,
            failures=[FixityFailure.from_error(e) for e in errors],
        )

    def to_json(self, indent: bool = True) -> str:
        """Serialize to canonical JSON."""
        return canonical_json_dumps(self.model_dump(mode="json"), indent=indent)
