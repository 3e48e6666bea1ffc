"""Worker thread for parallel verification.

Each worker thread:
1. Pulls a (sequence, path) item from the work queue
2. Verifies the file (stat, name parsing, streamed CRC32)
3. Puts (sequence, outcome) in the results queue

A worker holds at most one open file at a time, so the number of worker
threads is the ceiling on concurrent reads.
"""

import logging
import threading
from queue import Queue

from ..errors import classify_io_error, describe_error
from ..outcome import IoFailure
from ..task import verify_file

logger = logging.getLogger(__name__)


def worker_thread_main(
    thread_id: int,
    work_queue: Queue,
    results_queue: Queue,
    chunk_size: int,
    cancel_event: threading.Event,
) -> None:
    """Main function for worker thread.

    Runs until it receives a None sentinel. Every item taken from the work
    queue produces exactly one item on the results queue.

    Args:
        thread_id: Unique identifier for this worker thread
        work_queue: Queue of (sequence, Path) tuples to verify
        results_queue: Queue for (sequence, VerificationOutcome) tuples
        chunk_size: Read size for checksum computation
        cancel_event: Event signalling that queued work should be cancelled
    """
    logger.debug(f"Worker thread {thread_id} started")

    processed_count = 0
    error_count = 0

    try:
        while True:
            work_item = work_queue.get()

            if work_item is None:
                logger.debug(f"Worker thread {thread_id} received shutdown sentinel")
                work_queue.task_done()
                break

            sequence, path = work_item

            try:
                outcome = verify_file(path, chunk_size, cancel_event)
            except Exception as e:
                outcome = IoFailure(path=path, error_kind=classify_io_error(e), message=describe_error(e))
                error_count += 1
                logger.error(
                    f"Worker {thread_id} failed to verify {path}: {e}",
                    exc_info=True
                )

            try:
                results_queue.put((sequence, outcome))
                processed_count += 1
            finally:
                work_queue.task_done()

    except Exception as e:
        logger.error(f"Worker thread {thread_id} crashed: {e}", exc_info=True)
        raise

    finally:
        logger.debug(
            f"Worker thread {thread_id} shutting down "
            f"(processed={processed_count}, errors={error_count})"
        )
