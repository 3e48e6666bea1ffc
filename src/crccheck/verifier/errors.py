"""Error classification for the verifier."""

from .outcome import IoErrorKind


def classify_io_error(exception: BaseException) -> IoErrorKind:
    """
    Classify an exception raised while reading a file.

    Args:
        exception: The exception to classify

    Returns:
        NOT_FOUND, PERMISSION_DENIED, or OTHER for anything else
        (including non-OS errors).
    """
    if isinstance(exception, FileNotFoundError):
        return IoErrorKind.NOT_FOUND
    elif isinstance(exception, PermissionError):
        return IoErrorKind.PERMISSION_DENIED
    else:
        return IoErrorKind.OTHER


def describe_error(exception: BaseException) -> str:
    """Short message for an I/O failure line, without the path repeated."""
    if isinstance(exception, OSError) and exception.strerror:
        return exception.strerror
    return str(exception) or type(exception).__name__
