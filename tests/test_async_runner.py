import json
import threading
import time

from maakit.async_runner import AsyncRunner, MessageNotifier
from maakit.defs import Status


def _until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_post_block_processes_item():
    seen = []

    def process(task_id, item):
        seen.append((task_id, item))
        return True

    with AsyncRunner(process) as runner:
        task_id = runner.post("hello", block=True)
        assert seen == [(task_id, "hello")]
        assert runner.status(task_id) == Status.SUCCESS


def test_false_and_exception_mark_failed():
    def process(task_id, item):
        if item == "boom":
            raise RuntimeError("boom")
        return item

    with AsyncRunner(process) as runner:
        failed = runner.post(False, block=True)
        boom = runner.post("boom", block=True)
        assert runner.status(failed) == Status.FAILED
        assert runner.status(boom) == Status.FAILED


def test_unknown_id_is_invalid():
    with AsyncRunner(lambda i, x: True) as runner:
        assert runner.status(123456789) == Status.INVALID


def test_ids_increase_across_runners():
    with AsyncRunner(lambda i, x: True) as a, AsyncRunner(lambda i, x: True) as b:
        first = a.post(1)
        second = b.post(2)
        third = a.post(3)
        assert first < second < third


def test_items_in_order_and_statuses():
    gate = threading.Event()
    started = threading.Event()
    order = []

    def process(task_id, item):
        started.set()
        gate.wait(5)
        order.append(item)
        return True

    runner = AsyncRunner(process)
    try:
        first = runner.post("a")
        assert started.wait(5)
        second = runner.post("b")
        third = runner.post("c")
        assert runner.items() == [(second, "b"), (third, "c")]
        assert runner.status(first) == Status.RUNNING
        assert runner.status(second) == Status.PENDING
        assert runner.running() is True
        gate.set()
        runner.wait(third)
        assert order == ["a", "b", "c"]
        assert runner.status(third) == Status.SUCCESS
        assert _until(lambda: not runner.running())
    finally:
        gate.set()
        runner.release()


def test_clear_drops_queue_and_statuses():
    gate = threading.Event()
    started = threading.Event()
    processed = []

    def process(task_id, item):
        started.set()
        gate.wait(5)
        processed.append(item)
        return True

    runner = AsyncRunner(process)
    try:
        runner.post("a")
        assert started.wait(5)
        pending = runner.post("b")
        runner.clear()
        assert runner.items() == []
        assert runner.status(pending) == Status.INVALID
        runner.wait(pending)  # returns at once after clear
        gate.set()
        later = runner.post("c", block=True)
        assert "b" not in processed
        assert processed[-1] == "c"
        assert runner.status(later) == Status.SUCCESS
    finally:
        gate.set()
        runner.release()


def test_wait_returns_after_release():
    runner = AsyncRunner(lambda i, x: True)
    runner.release()
    task_id = runner.post("late")
    runner.wait(task_id)
    assert runner.status(task_id) == Status.PENDING


def test_notifier_passes_json_and_arg():
    received = []
    notifier = MessageNotifier(lambda *args: received.append(args), "ctx")
    notifier.notify("Task.Started", {"id": 5})
    notifier.notify("Task.Completed")
    assert received[0][0] == "Task.Started"
    assert json.loads(received[0][1]) == {"id": 5}
    assert received[0][2] == "ctx"
    assert received[1] == ("Task.Completed", "null", "ctx")