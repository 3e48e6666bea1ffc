"""Parallel processing components for the verifier.

This package contains the parallel processing infrastructure:
- Worker threads: verify one file at a time each
- Collector thread: single consumer feeding the result aggregator
- Queue manager: queue creation and backpressure
"""

from .collector_thread import OutcomeCollector
from .queue_manager import QueueManager
from .worker_thread import worker_thread_main

__all__ = [
    "OutcomeCollector",
    "QueueManager",
    "worker_thread_main",
]
