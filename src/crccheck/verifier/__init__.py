"""Concurrent verification of checksums embedded in file names."""

from .config import CrcCheckConfig, VerifierConfig
from .name_parser import extract_checksum, format_checksum
from .outcome import (
    IoErrorKind, IoFailure, Match, Mismatch, NoEmbeddedChecksum,
    OutcomeKind, VerificationOutcome,
)
from .parallel_verifier import ParallelVerifier
from .summary import ResultAggregator, Summary
from .task import verify_file

__all__ = [
    'CrcCheckConfig',
    'VerifierConfig',
    'extract_checksum',
    'format_checksum',
    'IoErrorKind',
    'IoFailure',
    'Match',
    'Mismatch',
    'NoEmbeddedChecksum',
    'OutcomeKind',
    'VerificationOutcome',
    'ParallelVerifier',
    'ResultAggregator',
    'Summary',
    'verify_file',
]
