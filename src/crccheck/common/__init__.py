"""Common utilities for crccheck packages."""

from .config import ConfigLoader
from .logging import setup_logging
from .logging_config import LoggingConfig
from .errors import CrcCheckError, ConfigurationError
from .checksums import (
    CRC32_CHUNK_SIZE, Crc32Accumulator, compute_crc32, compute_stream_crc32,
)

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'CrcCheckError',
    'ConfigurationError',
    'CRC32_CHUNK_SIZE',
    'Crc32Accumulator',
    'compute_crc32',
    'compute_stream_crc32',
]
