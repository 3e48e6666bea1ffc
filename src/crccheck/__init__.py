"""Verify CRC32 checksums embedded in file names."""

__version__ = "0.1.0"
