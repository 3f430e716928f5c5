"""Tests for the bounded work queue."""

import threading
import time

import pytest

from yadb.modules.buster import Candidate, WorkQueue


def _candidate(name: str, depth: int = 0) -> Candidate:
    return Candidate(url=f"http://target.test/{name}", path=name, depth=depth)


class TestWorkQueue:
    """Test WorkQueue."""

    def test_fifo_and_counters(self) -> None:
        queue = WorkQueue(10)
        assert queue.put(_candidate("a"))
        assert queue.put(_candidate("b"))
        assert len(queue) == 2
        assert queue.get().path == "a"
        assert queue.in_flight == 1
        queue.task_done()
        assert queue.issued == 2
        assert queue.completed == 1

    def test_rejects_duplicate_urls(self) -> None:
        queue = WorkQueue(10)
        assert queue.put(_candidate("a"))
        assert not queue.put(_candidate("a", depth=1))
        assert queue.issued == 1

    def test_closes_when_quiescent(self) -> None:
        queue = WorkQueue(10)
        queue.hold()
        queue.put(_candidate("a"))
        queue.release()
        assert not queue.closed
        queue.get()
        queue.task_done()
        assert queue.closed
        assert queue.get() is None

    def test_hold_keeps_queue_open(self) -> None:
        queue = WorkQueue(10)
        queue.hold()
        queue.put(_candidate("a"))
        queue.get()
        queue.hold()
        queue.release()
        queue.task_done()
        assert not queue.closed
        queue.release()
        assert queue.closed

    def test_put_blocks_at_high_water_mark(self) -> None:
        queue = WorkQueue(1)
        queue.put(_candidate("a"))
        done = threading.Event()

        def producer():
            queue.put(_candidate("b"))
            done.set()

        thread = threading.Thread(target=producer)
        thread.start()
        assert not done.wait(0.1)
        queue.get()
        assert done.wait(2)
        thread.join(2)
        assert queue.max_size == 1

    def test_cancel_drops_pending_and_wakes_consumers(self) -> None:
        queue = WorkQueue(10)
        queue.hold()
        for name in "abc":
            queue.put(_candidate(name))
        queue.close(cancel=True)
        assert queue.cancelled
        assert queue.dropped == 3
        assert queue.get() is None
        assert not queue.put(_candidate("d"))
        assert not queue.hold()

    def test_blocked_consumer_released_on_close(self) -> None:
        queue = WorkQueue(10)
        queue.hold()
        results = []
        thread = threading.Thread(target=lambda: results.append(queue.get()))
        thread.start()
        time.sleep(0.05)
        queue.release()
        thread.join(2)
        assert results == [None]
        assert queue.wait_closed(0)

    def test_unbalanced_calls(self) -> None:
        queue = WorkQueue(10)
        with pytest.raises(ValueError):
            queue.task_done()
        with pytest.raises(ValueError):
            queue.release()
        with pytest.raises(ValueError):
            WorkQueue(0)
