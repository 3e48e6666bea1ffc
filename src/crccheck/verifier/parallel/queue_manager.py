"""Queue management for parallel verification.

Manages work and results queues with backpressure control.
"""

import logging
from queue import Queue
from typing import Tuple

logger = logging.getLogger(__name__)


class QueueManager:
    """Manages queues for parallel processing with backpressure.

    Creates and manages:
    - Work queue: (sequence, Path) tuples for worker threads
    - Results queue: (sequence, VerificationOutcome) tuples for the collector

    Backpressure is provided by maxsize limits on queues: the producer
    blocks instead of buffering the whole path stream.
    """

    def __init__(self, work_queue_maxsize: int, results_queue_maxsize: int):
        """Initialize queue manager.

        Args:
            work_queue_maxsize: Maximum size of work queue (backpressure limit)
            results_queue_maxsize: Maximum size of results queue (backpressure limit)
        """
        self.work_queue_maxsize = work_queue_maxsize
        self.results_queue_maxsize = results_queue_maxsize

        self.work_queue: Queue = None
        self.results_queue: Queue = None

        logger.debug(
            f"QueueManager initialized (work_maxsize={work_queue_maxsize}, "
            f"results_maxsize={results_queue_maxsize})"
        )

    def create_queues(self) -> Tuple[Queue, Queue]:
        """Create work and results queues.

        Returns:
            Tuple of (work_queue, results_queue)
        """
        self.work_queue = Queue(maxsize=self.work_queue_maxsize)
        self.results_queue = Queue(maxsize=self.results_queue_maxsize)

        return self.work_queue, self.results_queue

    def get_work_queue_depth(self) -> int:
        """Number of paths waiting for a worker."""
        if self.work_queue is None:
            return 0
        return self.work_queue.qsize()

    def get_results_queue_depth(self) -> int:
        """Number of outcomes waiting for the collector."""
        if self.results_queue is None:
            return 0
        return self.results_queue.qsize()

    def get_queue_stats(self) -> dict:
        """Get statistics about queue depths.

        Returns:
            Dict with work_queue_depth and results_queue_depth
        """
        return {
            "work_queue_depth": self.get_work_queue_depth(),
            "results_queue_depth": self.get_results_queue_depth(),
            "work_queue_maxsize": self.work_queue_maxsize,
            "results_queue_maxsize": self.results_queue_maxsize,
        }

    def shutdown(self) -> None:
        """Drop queue references once all threads have exited."""
        logger.debug("QueueManager shutdown")
        self.work_queue = None
        self.results_queue = None
