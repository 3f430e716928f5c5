"""Tests for the recursion controller."""

import threading

from yadb.modules.buster import (
    ExpansionState,
    ProbeResult,
    RecursionController,
    Verdict,
    WorkQueue,
    make_candidate,
    parse_target,
)

TARGET = parse_target("http://target.test/")


def _hit(path: str, depth: int = 0, directory: bool = True, verdict=Verdict.FOUND):
    return ProbeResult(
        candidate=make_candidate(TARGET, path, depth),
        verdict=verdict,
        status=200,
        directory=directory,
    )


class TestRecursionController:
    """Test RecursionController."""

    def test_schedules_directory_once(self) -> None:
        queue = WorkQueue(10)
        controller = RecursionController(2, queue)
        assert controller.submit(_hit("admin"))
        assert not controller.submit(_hit("admin/"))
        assert controller.expanded == ["admin/"]
        assert controller.pending == 1
        assert controller.state("admin") == ExpansionState.DISCOVERED
        assert queue.holds == 1

    def test_expansion_lifecycle(self) -> None:
        queue = WorkQueue(10)
        controller = RecursionController(2, queue)
        queue.hold()
        controller.submit(_hit("admin"))
        assert controller.next_expansion() == ("admin/", 1)
        assert controller.state("admin/") == ExpansionState.EXPANDING
        controller.finish("admin/")
        assert controller.state("admin/") == ExpansionState.EXPANDED
        assert queue.holds == 1

    def test_max_depth_marks_expanded_without_scheduling(self) -> None:
        queue = WorkQueue(10)
        controller = RecursionController(1, queue)
        assert not controller.submit(_hit("admin/users", depth=1))
        assert controller.state("admin/users") == ExpansionState.EXPANDED
        assert controller.pending == 0
        assert queue.holds == 0

    def test_ignores_non_directories_and_misses(self) -> None:
        controller = RecursionController(3, WorkQueue(10))
        assert not controller.submit(_hit("index.html", directory=False))
        assert not controller.submit(_hit("gone", verdict=Verdict.NOT_FOUND))
        assert not controller.submit(_hit("broken", verdict=Verdict.ERROR))
        assert controller.expanded == []

    def test_disabled_at_depth_zero(self) -> None:
        controller = RecursionController(0, WorkQueue(10))
        assert not controller.submit(_hit("admin"))

    def test_redirect_results_expand(self) -> None:
        controller = RecursionController(1, WorkQueue(10))
        assert controller.submit(_hit("admin", verdict=Verdict.REDIRECT))

    def test_refuses_after_queue_closed(self) -> None:
        queue = WorkQueue(10)
        queue.close(cancel=True)
        controller = RecursionController(2, queue)
        assert not controller.submit(_hit("admin"))

    def test_shutdown_wakes_waiter(self) -> None:
        controller = RecursionController(2, WorkQueue(10))
        results = []
        thread = threading.Thread(target=lambda: results.append(controller.next_expansion()))
        thread.start()
        controller.shutdown()
        thread.join(2)
        assert results == [None]
        assert not controller.submit(_hit("admin"))
