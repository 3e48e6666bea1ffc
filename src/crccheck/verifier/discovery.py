"""Input resolution and file discovery.

Inputs are validated up front by ``resolve_inputs`` so that a bad
specification fails before any file is read. The paths themselves are then
produced lazily by ``iter_input_paths`` while verification runs.
"""

import glob
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from crccheck.common import ConfigurationError

logger = logging.getLogger(__name__)

# Brackets are deliberately absent: checksum names contain them.
GLOB_WILDCARDS = ("*", "?")


class InputKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    GLOB = "glob"


@dataclass(frozen=True)
class InputSpec:
    """One validated command-line input.

    Attributes:
        kind: How the input expands to file paths
        value: Path (file/directory) or pattern string (glob)
    """
    kind: InputKind
    value: str


def _classify_input(spec: Union[str, Path]) -> InputSpec:
    text = str(spec)
    if not text:
        raise ConfigurationError("Empty input path")

    path = Path(text)
    if path.is_dir():
        return InputSpec(InputKind.DIRECTORY, text)
    if path.exists():
        return InputSpec(InputKind.FILE, text)

    if any(wildcard in text for wildcard in GLOB_WILDCARDS):
        if next(glob.iglob(text, recursive=True), None) is None:
            raise ConfigurationError(f"Pattern matches no files: {text}", pattern=text)
        return InputSpec(InputKind.GLOB, text)

    # Missing plain paths are verified anyway and reported as I/O failures
    return InputSpec(InputKind.FILE, text)


def resolve_inputs(specs: Iterable[Union[str, Path]]) -> List[InputSpec]:
    """Validate input specifications before verification starts.

    Args:
        specs: Paths, directories or glob patterns from the user

    Returns:
        One InputSpec per input, in order

    Raises:
        ConfigurationError: Empty input, or a glob pattern that matches nothing
    """
    resolved = [_classify_input(spec) for spec in specs]
    logger.debug(f"Resolved inputs: {{'count': {len(resolved)}}}")
    return resolved


def iter_files(root: Path, recursive: bool = True, follow_symlinks: bool = False) -> Iterator[Path]:
    """Lazily yield regular files below a directory.

    Entries are sorted per directory, so the order is stable between runs.

    Args:
        root: Directory to walk
        recursive: Descend into subdirectories
        follow_symlinks: Follow symlinked directories

    Yields:
        File paths
    """
    def on_error(error: OSError) -> None:
        logger.warning(f"Cannot list directory: {{'path': {error.filename!r}, 'error': {error.strerror!r}}}")

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=follow_symlinks):
        dirnames.sort()
        if not recursive:
            dirnames.clear()

        current = Path(dirpath)
        for name in sorted(filenames):
            file_path = current / name
            if file_path.is_file():
                yield file_path
            else:
                logger.debug(f"Skipping non-regular file: {{'path': {str(file_path)!r}}}")


def iter_input_paths(
    inputs: Iterable[InputSpec],
    recursive: bool = True,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Lazily expand validated inputs into file paths.

    Args:
        inputs: Output of resolve_inputs
        recursive: Descend into subdirectories of directory inputs
        follow_symlinks: Follow symlinked directories

    Yields:
        File paths to verify
    """
    for spec in inputs:
        if spec.kind is InputKind.DIRECTORY:
            yield from iter_files(Path(spec.value), recursive, follow_symlinks)
        elif spec.kind is InputKind.GLOB:
            for match in glob.iglob(spec.value, recursive=True):
                match_path = Path(match)
                if match_path.is_dir():
                    yield from iter_files(match_path, recursive, follow_symlinks)
                else:
                    yield match_path
        else:
            yield Path(spec.value)
