"""Collector thread for parallel verification.

The collector is the only consumer of the results queue and the only code
that touches the aggregator, so summary counters need no lock.

Outcomes are handed on in completion order, or in submission order when
``ordered`` is set. In ordered mode, outcomes that finish ahead of an
earlier path wait in a reorder buffer keyed by sequence number.
"""

import logging
from queue import Queue
from typing import Dict, Optional

from ..outcome import VerificationOutcome
from ..summary import ResultAggregator

logger = logging.getLogger(__name__)


class OutcomeCollector:
    """Drains (sequence, outcome) tuples into a ResultAggregator.

    If the aggregator raises, the error is kept in ``error`` and the
    collector keeps draining the queue so that workers never block on a
    full results queue. The orchestrator re-raises it after shutdown.
    """

    def __init__(self, results_queue: Queue, aggregator: ResultAggregator, ordered: bool = False):
        self.results_queue = results_queue
        self.aggregator = aggregator
        self.ordered = ordered

        self.error: Optional[BaseException] = None
        self.collected = 0
        self._next_sequence = 0
        self._pending: Dict[int, VerificationOutcome] = {}

    def run(self) -> None:
        """Thread target: runs until a None sentinel arrives."""
        logger.debug(f"Collector thread started (ordered={self.ordered})")

        try:
            while True:
                result = self.results_queue.get()

                if result is None:
                    logger.debug("Collector thread received shutdown sentinel")
                    self.results_queue.task_done()
                    break

                try:
                    sequence, outcome = result
                    if self.ordered:
                        self._pending[sequence] = outcome
                        self._release_in_order()
                    else:
                        self._deliver(outcome)
                finally:
                    self.results_queue.task_done()

            if self._pending:
                # Only reachable if sequences were skipped upstream
                logger.warning(f"Collector flushing {len(self._pending)} outcomes out of order")
                for sequence in sorted(self._pending):
                    self._deliver(self._pending.pop(sequence))

        finally:
            logger.debug(f"Collector thread shutting down (collected={self.collected})")

    def _release_in_order(self) -> None:
        while self._next_sequence in self._pending:
            self._deliver(self._pending.pop(self._next_sequence))
            self._next_sequence += 1

    def _deliver(self, outcome: VerificationOutcome) -> None:
        self.collected += 1
        if self.error is not None:
            return
        try:
            self.aggregator.consume(outcome)
        except Exception as e:
            logger.error(f"Collector failed to record outcome for {outcome.path}: {e}", exc_info=True)
            self.error = e
