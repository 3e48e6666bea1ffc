"""Verification outcome model.

Each verified path produces exactly one outcome. Variants are separate
frozen dataclasses so an outcome only ever holds the fields of its kind.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar


class OutcomeKind(str, Enum):
    """Terminal classification of one verification."""

    MATCH = "match"
    MISMATCH = "mismatch"
    NO_CHECKSUM = "no_checksum"
    IO_FAILURE = "io_failure"

    @property
    def label(self) -> str:
        """Short label printed in front of each result line."""
        return _LABELS[self]

    @property
    def style(self) -> str:
        """Styling hint for terminal formatters: success, error or neutral."""
        return _STYLES[self]

    @property
    def is_failure(self) -> bool:
        return self in (OutcomeKind.MISMATCH, OutcomeKind.IO_FAILURE)


_LABELS = {
    OutcomeKind.MATCH: "OK",
    OutcomeKind.MISMATCH: "MISMATCH",
    OutcomeKind.NO_CHECKSUM: "SKIPPED",
    OutcomeKind.IO_FAILURE: "ERROR",
}

_STYLES = {
    OutcomeKind.MATCH: "success",
    OutcomeKind.MISMATCH: "error",
    OutcomeKind.NO_CHECKSUM: "neutral",
    OutcomeKind.IO_FAILURE: "error",
}


class IoErrorKind(str, Enum):
    """Why a file could not be read."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    OTHER = "other"


@dataclass(frozen=True)
class VerificationOutcome:
    """Base for all outcomes; carries the originating path."""

    path: Path

    kind: ClassVar[OutcomeKind]


@dataclass(frozen=True)
class Match(VerificationOutcome):
    """Embedded and computed checksums agree."""

    checksum: int

    kind: ClassVar[OutcomeKind] = OutcomeKind.MATCH


@dataclass(frozen=True)
class Mismatch(VerificationOutcome):
    """Embedded checksum differs from the content's CRC32."""

    expected: int
    actual: int

    kind: ClassVar[OutcomeKind] = OutcomeKind.MISMATCH


@dataclass(frozen=True)
class NoEmbeddedChecksum(VerificationOutcome):
    """File name carries no checksum; content was not read."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.NO_CHECKSUM


@dataclass(frozen=True)
class IoFailure(VerificationOutcome):
    """File could not be read."""

    error_kind: IoErrorKind
    message: str

    kind: ClassVar[OutcomeKind] = OutcomeKind.IO_FAILURE
