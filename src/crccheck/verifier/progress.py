"""Progress tracking for verification runs.

Tracks and reports verification progress. Paths are discovered while
verification runs, so the number of files is not known up front and no ETA
is reported; progress is the running count and the processing rate.
"""

import logging
import time

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Tracks verification progress and processing rate.

    Features:
    - Files processed count
    - Processing rate (files/sec)
    - Periodic logging (every N files)
    """

    def __init__(self, log_interval: int = 100):
        """Initialize progress tracker.

        Args:
            log_interval: Log progress every N files (0 disables)
        """
        self.log_interval = log_interval

        self.files_processed = 0
        self.start_time = time.time()
        self.last_log_time = self.start_time
        self.last_log_count = 0

    def increment(self, count: int = 1) -> None:
        """Increment files processed counter.

        Args:
            count: Number of files to add to counter
        """
        self.files_processed += count

        if self.log_interval > 0 and self.files_processed % self.log_interval == 0:
            self._log_progress()

    def get_progress(self) -> dict:
        """Get current progress statistics.

        Returns:
            Dict with files_processed, elapsed_seconds and rate_files_per_sec
        """
        elapsed_time = time.time() - self.start_time

        if elapsed_time > 0:
            rate = self.files_processed / elapsed_time
        else:
            rate = 0.0

        return {
            "files_processed": self.files_processed,
            "elapsed_seconds": elapsed_time,
            "rate_files_per_sec": rate,
        }

    def _log_progress(self) -> None:
        """Log current progress."""
        progress = self.get_progress()

        # Instantaneous rate since last log
        current_time = time.time()
        time_delta = current_time - self.last_log_time
        count_delta = self.files_processed - self.last_log_count
        instant_rate = count_delta / time_delta if time_delta > 0 else 0.0

        logger.info(
            f"Progress: {self.files_processed} files - "
            f"{progress['rate_files_per_sec']:.1f} files/sec (avg), "
            f"{instant_rate:.1f} files/sec (current)"
        )

        self.last_log_time = current_time
        self.last_log_count = self.files_processed

    def log_final_summary(self) -> None:
        """Log final progress summary."""
        elapsed_time = time.time() - self.start_time
        rate = self.files_processed / elapsed_time if elapsed_time > 0 else 0.0

        logger.info(
            f"Verification complete: {self.files_processed} files processed "
            f"in {format_duration(elapsed_time)} "
            f"({rate:.1f} files/sec average)"
        )


def format_duration(seconds: float) -> str:
    """Format seconds as human-readable time.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted string (e.g., "2h 15m 30s")
    """
    if seconds <= 0:
        return "0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")

    return " ".join(parts)
