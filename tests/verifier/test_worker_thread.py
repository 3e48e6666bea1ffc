"""Tests for worker thread."""

import threading
from pathlib import Path
from queue import Queue
from unittest.mock import patch

import pytest

from crccheck.common import CRC32_CHUNK_SIZE
from crccheck.verifier.outcome import IoErrorKind, IoFailure, Match, NoEmbeddedChecksum
from crccheck.verifier.parallel.worker_thread import worker_thread_main
from crccheck.verifier.task import CANCELLED_MESSAGE


@pytest.fixture
def work_queue():
    """Create a work queue."""
    return Queue()


@pytest.fixture
def results_queue():
    """Create a results queue."""
    return Queue()


@pytest.fixture
def cancel_event():
    """Create a cancel event."""
    return threading.Event()


def run_worker(work_queue, results_queue, cancel_event):
    worker = threading.Thread(
        target=worker_thread_main,
        args=(1, work_queue, results_queue, CRC32_CHUNK_SIZE, cancel_event),
    )
    worker.start()
    worker.join(timeout=5)
    return worker


def drain(results_queue):
    results = []
    while not results_queue.empty():
        results.append(results_queue.get())
    return results


class TestWorkerThreadMain:
    """Tests for worker_thread_main function."""

    def test_verifies_queued_files(self, tmp_path, work_queue, results_queue, cancel_event):
        """Test that each work item yields one sequenced outcome."""
        good = tmp_path / "good.[CBF43926].txt"
        good.write_bytes(b"123456789")
        plain = tmp_path / "plain.txt"
        plain.write_bytes(b"x")

        work_queue.put((0, good))
        work_queue.put((1, plain))
        work_queue.put(None)

        worker = run_worker(work_queue, results_queue, cancel_event)

        assert not worker.is_alive()
        assert drain(results_queue) == [
            (0, Match(path=good, checksum=0xCBF43926)),
            (1, NoEmbeddedChecksum(path=plain)),
        ]

    def test_stops_on_sentinel(self, work_queue, results_queue, cancel_event):
        """Test worker shutdown with an empty queue."""
        work_queue.put(None)

        worker = run_worker(work_queue, results_queue, cancel_event)

        assert not worker.is_alive()
        assert results_queue.empty()

    def test_marks_all_items_done(self, tmp_path, work_queue, results_queue, cancel_event):
        """Test that task_done is called for work items and the sentinel."""
        work_queue.put((0, tmp_path / "missing.bin"))
        work_queue.put(None)

        run_worker(work_queue, results_queue, cancel_event)

        assert work_queue.unfinished_tasks == 0

    def test_missing_file_is_reported(self, tmp_path, work_queue, results_queue, cancel_event):
        """Test that a missing file does not stop the worker."""
        missing = tmp_path / "missing.[DEADBEEF].bin"
        present = tmp_path / "plain.txt"
        present.write_bytes(b"")

        work_queue.put((0, missing))
        work_queue.put((1, present))
        work_queue.put(None)

        run_worker(work_queue, results_queue, cancel_event)
        results = drain(results_queue)

        assert len(results) == 2
        assert results[0][1].error_kind is IoErrorKind.NOT_FOUND
        assert results[1][1] == NoEmbeddedChecksum(path=present)

    def test_unexpected_exception_becomes_io_failure(self, work_queue, results_queue, cancel_event):
        """Test that a crash while verifying still yields an outcome."""
        path = Path("/data/file.[DEADBEEF].bin")
        work_queue.put((0, path))
        work_queue.put(None)

        with patch(
            "crccheck.verifier.parallel.worker_thread.verify_file",
            side_effect=RuntimeError("boom"),
        ):
            worker = run_worker(work_queue, results_queue, cancel_event)

        assert not worker.is_alive()
        assert drain(results_queue) == [
            (0, IoFailure(path=path, error_kind=IoErrorKind.OTHER, message="boom")),
        ]

    def test_cancelled_items_are_still_reported(self, tmp_path, work_queue, results_queue, cancel_event):
        """Test that queued work after cancellation yields cancelled outcomes."""
        path = tmp_path / "good.[CBF43926].txt"
        path.write_bytes(b"123456789")
        cancel_event.set()

        work_queue.put((0, path))
        work_queue.put(None)

        run_worker(work_queue, results_queue, cancel_event)

        assert drain(results_queue) == [
            (0, IoFailure(path=path, error_kind=IoErrorKind.OTHER, message=CANCELLED_MESSAGE)),
        ]
