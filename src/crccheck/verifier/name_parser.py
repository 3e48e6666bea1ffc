"""Embedded checksum extraction from file names.

Release naming conventions carry the CRC32 of the content as a bracketed
8-digit hex group, e.g. ``Some.Show.E01.[A1B2C3D4].mkv``.

Parsing contract:
- Search from the right: take the last ``]`` and the last ``[`` before it.
- If the enclosed text is exactly 8 hex digits (either case), that is the
  checksum.
- Otherwise cut the name at that ``[`` and search again.

So when a name holds several candidates the rightmost well-formed group
wins: ``[11111111][22222222]`` yields ``0x22222222`` and
``[11111111]aa[bbb].txt`` yields ``0x11111111``.
"""

from typing import Optional, Tuple

CHECKSUM_HEX_DIGITS = 8
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def _find_bracket_pair(text: str) -> Optional[Tuple[int, int]]:
    right = text.rfind("]")
    if right == -1:
        return None
    left = text.rfind("[", 0, right)
    if left == -1:
        return None
    return left, right


def _is_checksum_token(token: str) -> bool:
    return len(token) == CHECKSUM_HEX_DIGITS and all(c in _HEX_CHARS for c in token)


def extract_checksum(file_name: str) -> Optional[int]:
    """Extract the embedded CRC32 from a file name.

    Args:
        file_name: Bare file name (not a full path)

    Returns:
        Checksum as unsigned 32-bit integer, or None when the name carries
        no well-formed token. Never raises.
    """
    remaining = file_name
    while (pair := _find_bracket_pair(remaining)) is not None:
        left, right = pair
        token = remaining[left + 1:right]
        if _is_checksum_token(token):
            return int(token, 16)
        remaining = remaining[:left]
    return None


def format_checksum(value: int) -> str:
    """Render a checksum the way it appears in file names (uppercase hex)."""
    return f"{value:08X}"
