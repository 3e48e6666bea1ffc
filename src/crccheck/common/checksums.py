"""Checksum utilities for file integrity verification."""

import threading
import zlib
from pathlib import Path
from typing import BinaryIO, Optional

# Constants for checksum calculation
CRC32_CHUNK_SIZE = 65536  # 64 KB chunks


class Crc32Accumulator:
    """Incremental CRC32 (reflected polynomial 0xEDB88320).

    Feeding a byte stream in any number of chunks yields the same value
    as a single ``zlib.crc32`` call over the concatenated bytes.
    """

    def __init__(self) -> None:
        self._crc = 0

    def update(self, chunk: bytes) -> None:
        self._crc = zlib.crc32(chunk, self._crc)

    @property
    def value(self) -> int:
        """Current checksum as unsigned 32-bit integer."""
        return self._crc & 0xFFFFFFFF


def compute_stream_crc32(
    stream: BinaryIO,
    chunk_size: int = CRC32_CHUNK_SIZE,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """
    Compute CRC32 checksum of a binary stream, one chunk at a time.

    Args:
        stream: Readable binary stream
        chunk_size: Bytes read per chunk
        cancel_event: Optional event; when set, reading stops between chunks

    Returns:
        CRC32 checksum as unsigned 32-bit integer

    Raises:
        OSError: If the stream cannot be read
        InterruptedError: If cancel_event was set before the stream was exhausted
        ValueError: If chunk_size is not positive
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    accumulator = Crc32Accumulator()

    while chunk := stream.read(chunk_size):
        if cancel_event is not None and cancel_event.is_set():
            raise InterruptedError("checksum computation cancelled")
        accumulator.update(chunk)

    return accumulator.value


def compute_crc32(
    file_path: Path,
    chunk_size: int = CRC32_CHUNK_SIZE,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """
    Compute CRC32 checksum of entire file.

    The file is streamed in fixed-size chunks, so memory use does not
    depend on file size.

    Args:
        file_path: Path to the file
        chunk_size: Bytes read per chunk
        cancel_event: Optional event that aborts the read between chunks

    Returns:
        CRC32 checksum as unsigned 32-bit integer

    Raises:
        OSError: If file cannot be read
    """
    with open(file_path, 'rb') as f:
        return compute_stream_crc32(f, chunk_size, cancel_event)

