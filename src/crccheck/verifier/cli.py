"""CLI command for checksum verification."""

import logging
import argparse
import signal
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import CrcCheckConfig
from .discovery import iter_input_paths, resolve_inputs
from .parallel_verifier import ParallelVerifier
from .progress import ProgressTracker
from .summary import ResultAggregator, Summary, format_summary
from crccheck.common import ConfigLoader, ConfigurationError, setup_logging
from crccheck.common.config_utils import expand_path_variables

APP_NAME = "crccheck"

EXIT_CONFIGURATION_ERROR = 2
EXIT_INTERRUPTED = 130


def _print_line(line: str) -> None:
    print(line, flush=True)


def verify_command(
    config: CrcCheckConfig,
    inputs: Sequence[str],
    concurrency_override: Optional[int] = None,
    chunk_size_override: Optional[int] = None,
    ordered_override: Optional[bool] = None,
    recursive_override: Optional[bool] = None,
    follow_symlinks_override: Optional[bool] = None,
    failures_only: bool = False,
    emit: Callable[[str], None] = _print_line,
) -> int:
    """Verify the embedded checksums of all files named by ``inputs``.

    Args:
        config: Configuration object
        inputs: Files, directories or glob patterns
        concurrency_override: Optional override for the concurrency ceiling
        chunk_size_override: Optional override for the read chunk size
        ordered_override: Optional override for ordered output
        recursive_override: Optional override for directory recursion
        follow_symlinks_override: Optional override for symlink following
        failures_only: Only print mismatches and I/O failures
        emit: Receives every output line

    Returns:
        0 if nothing mismatched or failed, 1 otherwise, 2 for configuration
        errors, 130 when interrupted
    """
    logger = logging.getLogger(__package__ or __name__)

    verifier_config = config.verifier
    concurrency = concurrency_override if concurrency_override is not None else verifier_config.concurrency
    chunk_size = chunk_size_override if chunk_size_override is not None else verifier_config.chunk_size
    ordered = ordered_override if ordered_override is not None else verifier_config.ordered
    recursive = recursive_override if recursive_override is not None else verifier_config.recursive
    follow_symlinks = (
        follow_symlinks_override if follow_symlinks_override is not None else verifier_config.follow_symlinks
    )

    try:
        specs = resolve_inputs(inputs)
        verifier = ParallelVerifier(
            concurrency=concurrency,
            chunk_size=chunk_size,
            queue_maxsize=verifier_config.queue_maxsize,
            ordered=ordered,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return EXIT_CONFIGURATION_ERROR

    summary = Summary()
    progress_tracker = ProgressTracker()
    aggregator = ResultAggregator(
        summary,
        emit=emit,
        progress_tracker=progress_tracker,
        failures_only=failures_only,
    )

    verifier.verify(iter_input_paths(specs, recursive, follow_symlinks), aggregator)

    progress_tracker.log_final_summary()
    emit(format_summary(summary))

    if summary.interrupted:
        return EXIT_INTERRUPTED
    return summary.exit_status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Check CRC32 checksums embedded in file names, e.g. 'title.[A1B2C3D4].mkv'"
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files, directories or glob patterns to verify (default: current directory)"
    )
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        help="Maximum number of files verified at once (overrides config, default: CPU cores)"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Bytes read per chunk while computing checksums (overrides config)"
    )
    parser.add_argument(
        "--ordered",
        action="store_true",
        help="Print results in input order instead of completion order"
    )
    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not descend into subdirectories"
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        help="Follow symlinked directories"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only print mismatches and unreadable files"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (defaults.toml)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crccheck command."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(config_class=CrcCheckConfig, app_name=APP_NAME)
    try:
        config = loader.load(defaults_path=args.config)
    except ConfigurationError as e:
        setup_logging()
        logging.getLogger(__package__ or __name__).error(f"Configuration error: {e.message}")
        return EXIT_CONFIGURATION_ERROR

    log_file = Path(expand_path_variables(config.logging.file)) if config.logging.file else None
    setup_logging(
        level=args.log_level or config.logging.level,
        format=config.logging.format,
        log_file=log_file,
    )

    # SIGTERM cancels like Ctrl-C
    previous_handler = signal.signal(signal.SIGTERM, signal.default_int_handler)
    try:
        return verify_command(
            config=config,
            inputs=args.paths,
            concurrency_override=args.jobs,
            chunk_size_override=args.chunk_size,
            ordered_override=True if args.ordered else None,
            recursive_override=False if args.no_recursive else None,
            follow_symlinks_override=True if args.follow_symlinks else None,
            failures_only=args.quiet,
        )
    except KeyboardInterrupt:
        # Second interrupt while draining in-flight files
        logging.getLogger(__package__ or __name__).warning("Interrupted before shutdown completed")
        return EXIT_INTERRUPTED
    finally:
        signal.signal(signal.SIGTERM, previous_handler)


if __name__ == "__main__":
    sys.exit(main())
