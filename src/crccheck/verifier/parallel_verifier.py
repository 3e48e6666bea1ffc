"""Parallel verification orchestrator.

Coordinates all parallel processing components:
- N worker threads, each verifying one file at a time
- 1 collector thread feeding the result aggregator
- Bounded queues for backpressure

The caller's thread is the producer: it pulls paths from the (possibly
lazy) input iterable only as fast as workers free up space in the bounded
work queue, so the full path list is never materialized.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Iterable, List, Optional, Union

from crccheck.common import CRC32_CHUNK_SIZE, ConfigurationError
from crccheck.common.config_utils import get_cpu_count
from .parallel.collector_thread import OutcomeCollector
from .parallel.queue_manager import QueueManager
from .parallel.worker_thread import worker_thread_main
from .summary import ResultAggregator, Summary

logger = logging.getLogger(__name__)


class ParallelVerifier:
    """Bounded-concurrency checksum verifier.

    Configuration:
    - concurrency: maximum files verified at once (default: CPU count)
    - chunk_size: read size for CRC32 computation
    - queue_maxsize: paths buffered ahead of the workers (default: concurrency)
    - ordered: report outcomes in submission order instead of completion order
    """

    def __init__(
        self,
        concurrency: Optional[int] = None,
        chunk_size: int = CRC32_CHUNK_SIZE,
        queue_maxsize: Optional[int] = None,
        ordered: bool = False,
    ):
        """Initialize parallel verifier.

        Raises:
            ConfigurationError: If any limit is below 1
        """
        if concurrency is None:
            concurrency = get_cpu_count()
        if concurrency < 1:
            raise ConfigurationError(
                f"Concurrency must be at least 1, got {concurrency}", concurrency=concurrency
            )
        if chunk_size < 1:
            raise ConfigurationError(
                f"Chunk size must be at least 1 byte, got {chunk_size}", chunk_size=chunk_size
            )
        if queue_maxsize is None:
            queue_maxsize = concurrency
        if queue_maxsize < 1:
            raise ConfigurationError(
                f"Queue size must be at least 1, got {queue_maxsize}", queue_maxsize=queue_maxsize
            )

        self.concurrency = concurrency
        self.chunk_size = chunk_size
        self.queue_maxsize = queue_maxsize
        self.ordered = ordered

        logger.info(
            f"Initialized ParallelVerifier: {{'concurrency': {concurrency}, 'chunk_size': {chunk_size}, "
            f"'queue_maxsize': {queue_maxsize}, 'ordered': {ordered}}}"
        )

    def verify(self, paths: Iterable[Union[Path, str]], aggregator: ResultAggregator) -> Summary:
        """Verify every path and feed the outcomes to the aggregator.

        Every path taken from ``paths`` produces exactly one outcome.
        The first KeyboardInterrupt, whether it arrives while paths are being
        submitted or while the pipeline drains, stops admission, lets queued
        and in-flight files finish as cancelled I/O failures and marks the
        summary as interrupted. A second KeyboardInterrupt propagates. An
        exception raised by ``paths`` itself propagates once the submitted
        files are done.

        Args:
            paths: File paths, possibly produced lazily
            aggregator: Receives outcomes from the collector thread

        Returns:
            The aggregator's summary
        """
        summary = aggregator.summary
        start_time = time.time()

        queue_manager = QueueManager(
            work_queue_maxsize=self.queue_maxsize,
            results_queue_maxsize=self.queue_maxsize,
        )
        work_queue, results_queue = queue_manager.create_queues()
        cancel_event = threading.Event()

        collector = OutcomeCollector(results_queue, aggregator, ordered=self.ordered)
        collector_thread = threading.Thread(target=collector.run, name="Collector", daemon=True)
        collector_thread.start()

        workers = self._start_workers(work_queue, results_queue, cancel_event)

        submitted = 0
        try:
            try:
                for path in paths:
                    work_queue.put((submitted, Path(path)))
                    submitted += 1
            except KeyboardInterrupt:
                self._cancel(queue_manager, cancel_event, summary, submitted)
            finally:
                self._wait_for_completion(
                    queue_manager, workers, collector_thread, cancel_event, summary, submitted
                )
        finally:
            queue_manager.shutdown()

        if collector.error is not None:
            raise collector.error

        logger.info(
            f"Verification finished: {{'submitted': {submitted}, 'duration_seconds': "
            f"{time.time() - start_time:.1f}, 'summary': {summary.to_dict()}}}"
        )
        return summary

    def _cancel(
        self,
        queue_manager: QueueManager,
        cancel_event: threading.Event,
        summary: Summary,
        submitted: int,
    ) -> None:
        logger.warning(
            f"Interrupted, cancelling remaining work: {{'submitted': {submitted}, "
            f"'queues': {queue_manager.get_queue_stats()}}}"
        )
        cancel_event.set()
        summary.interrupted = True

    def _start_workers(
        self,
        work_queue,
        results_queue,
        cancel_event: threading.Event,
    ) -> List[threading.Thread]:
        workers = []
        for i in range(self.concurrency):
            thread = threading.Thread(
                target=worker_thread_main,
                args=(i, work_queue, results_queue, self.chunk_size, cancel_event),
                name=f"Worker-{i}",
                daemon=True,
            )
            thread.start()
            workers.append(thread)

        logger.debug(f"Started worker threads: {{'count': {self.concurrency}}}")
        return workers

    def _wait_for_completion(
        self,
        queue_manager: QueueManager,
        workers: List[threading.Thread],
        collector_thread: threading.Thread,
        cancel_event: threading.Event,
        summary: Summary,
        submitted: int,
    ) -> None:
        """Drain queued work, then stop workers and the collector.

        Resumable: an interrupt cancels the remaining work and the drain
        continues where it stopped, so sentinels are never sent twice. An
        interrupt on an already cancelled run propagates.
        """
        sentinels_sent = 0
        collector_stopping = False

        while True:
            try:
                # One sentinel per worker, queued behind any remaining paths
                while sentinels_sent < len(workers):
                    queue_manager.work_queue.put(None)
                    sentinels_sent += 1

                for thread in workers:
                    thread.join()

                if not collector_stopping:
                    queue_manager.results_queue.put(None)
                    collector_stopping = True
                collector_thread.join()
            except KeyboardInterrupt:
                if summary.interrupted:
                    raise
                self._cancel(queue_manager, cancel_event, summary, submitted)
                continue

            logger.debug(f"Worker and collector threads finished: {queue_manager.get_queue_stats()}")
            return
