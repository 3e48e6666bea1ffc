"""Result aggregation and exit status.

The aggregator is fed by a single consumer (the collector thread), so the
summary counters are never updated concurrently.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .name_parser import format_checksum
from .outcome import IoFailure, Mismatch, OutcomeKind, VerificationOutcome
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass
class Summary:
    """Aggregate counters for one run.

    Invariant: matches + mismatches + skipped + io_failures == total.
    """

    total: int = 0
    matches: int = 0
    mismatches: int = 0
    skipped: int = 0
    io_failures: int = 0
    interrupted: bool = False

    def record(self, outcome: VerificationOutcome) -> None:
        kind = outcome.kind
        if kind is OutcomeKind.MATCH:
            self.matches += 1
        elif kind is OutcomeKind.MISMATCH:
            self.mismatches += 1
        elif kind is OutcomeKind.NO_CHECKSUM:
            self.skipped += 1
        elif kind is OutcomeKind.IO_FAILURE:
            self.io_failures += 1
        else:
            raise ValueError(f"Unknown outcome kind: {kind!r}")
        self.total += 1

    @property
    def is_success(self) -> bool:
        """True iff there were no mismatches and no I/O failures."""
        return self.mismatches == 0 and self.io_failures == 0

    @property
    def exit_status(self) -> int:
        return EXIT_SUCCESS if self.is_success else EXIT_FAILURE

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "matches": self.matches,
            "mismatches": self.mismatches,
            "skipped": self.skipped,
            "io_failures": self.io_failures,
            "interrupted": self.interrupted,
        }


def format_outcome_line(outcome: VerificationOutcome) -> str:
    """Render one result line, e.g. ``      OK - show.[A1B2C3D4].mkv``."""
    line = f"{outcome.kind.label:>8} - {outcome.path}"
    if isinstance(outcome, Mismatch):
        line += f" (expected {format_checksum(outcome.expected)}, got {format_checksum(outcome.actual)})"
    elif isinstance(outcome, IoFailure):
        line += f" ({outcome.error_kind.value}: {outcome.message})"
    return line


def format_summary(summary: Summary) -> str:
    """Render the closing totals line."""
    text = (
        f"{summary.total} files: {summary.matches} ok, {summary.mismatches} mismatched, "
        f"{summary.skipped} skipped, {summary.io_failures} errors"
    )
    if summary.interrupted:
        text += " (interrupted)"
    return text


class ResultAggregator:
    """Consumes outcomes in arrival order and keeps the summary.

    Args:
        summary: Counters to update; owned by the caller and read at the end
        emit: Receives one rendered line per outcome (e.g. ``print``)
        progress_tracker: Optional tracker advanced once per outcome
        failures_only: Only emit lines for mismatches and I/O failures
    """

    def __init__(
        self,
        summary: Summary,
        emit: Optional[Callable[[str], None]] = None,
        progress_tracker: Optional[ProgressTracker] = None,
        failures_only: bool = False,
    ):
        self.summary = summary
        self.emit = emit
        self.progress_tracker = progress_tracker
        self.failures_only = failures_only

    def consume(self, outcome: VerificationOutcome) -> None:
        self.summary.record(outcome)

        if self.emit is not None and (outcome.kind.is_failure or not self.failures_only):
            self.emit(format_outcome_line(outcome))

        if self.progress_tracker is not None:
            self.progress_tracker.increment()
