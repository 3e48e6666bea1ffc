"""Single-file verification.

State machine per file::

    Pending -> Extracting -> NoEmbeddedChecksum
                          -> Computing -> Match | Mismatch | IoFailure

Pending stats the path first, so a missing or unreadable path is an
IoFailure whether or not its name carries a checksum.
"""

import errno
import logging
import os
import stat
import threading
from pathlib import Path
from typing import Optional

from crccheck.common.checksums import CRC32_CHUNK_SIZE, compute_crc32
from .errors import classify_io_error, describe_error
from .name_parser import extract_checksum, format_checksum
from .outcome import (
    IoErrorKind,
    IoFailure,
    Match,
    Mismatch,
    NoEmbeddedChecksum,
    VerificationOutcome,
)

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "verification cancelled"


def _io_failure(path: Path, error: BaseException) -> IoFailure:
    error_kind = classify_io_error(error)
    logger.warning(f"Cannot read file: {{'path': {str(path)!r}, 'kind': {error_kind.value!r}, 'error': {str(error)!r}}}")
    return IoFailure(path=path, error_kind=error_kind, message=describe_error(error))


def verify_file(
    path: Path,
    chunk_size: int = CRC32_CHUNK_SIZE,
    cancel_event: Optional[threading.Event] = None,
) -> VerificationOutcome:
    """Verify one file against the checksum embedded in its name.

    Per-file problems never raise; they become IoFailure outcomes.

    Args:
        path: File to verify
        chunk_size: Read size for checksum computation
        cancel_event: When set, the file is reported as cancelled instead of
            (or while) being read

    Returns:
        Exactly one outcome for the path
    """
    path = Path(path)

    if cancel_event is not None and cancel_event.is_set():
        return IoFailure(path=path, error_kind=IoErrorKind.OTHER, message=CANCELLED_MESSAGE)

    # Pending
    try:
        mode = path.stat().st_mode
    except OSError as e:
        return _io_failure(path, e)
    if stat.S_ISDIR(mode):
        return _io_failure(path, IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), str(path)))

    # Extracting
    expected = extract_checksum(path.name)
    if expected is None:
        logger.debug(f"No embedded checksum: {{'path': {str(path)!r}}}")
        return NoEmbeddedChecksum(path=path)

    # Computing
    try:
        actual = compute_crc32(path, chunk_size, cancel_event)
    except InterruptedError:
        return IoFailure(path=path, error_kind=IoErrorKind.OTHER, message=CANCELLED_MESSAGE)
    except OSError as e:
        return _io_failure(path, e)

    if actual == expected:
        logger.debug(f"Checksum OK: {{'path': {str(path)!r}, 'crc32': {format_checksum(actual)!r}}}")
        return Match(path=path, checksum=actual)

    logger.info(
        f"Checksum mismatch: {{'path': {str(path)!r}, 'expected': {format_checksum(expected)!r}, "
        f"'actual': {format_checksum(actual)!r}}}"
    )
    return Mismatch(path=path, expected=expected, actual=actual)
