"""Background worker that processes posted items one at a time."""

from __future__ import annotations

import itertools
import json
import threading
from collections import deque
from collections.abc import Callable
from typing import Any, Generic, Optional, TypeVar

from .defs import INVALID_ID, Status

T = TypeVar("T")

ProcessFunc = Callable[[int, T], bool]
Callback = Callable[[str, str, Any], None]


class _IdSource:
    """Ids shared by every runner in the process, so they never collide."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self.last = INVALID_ID

    def next(self) -> int:
        with self._lock:
            self.last = next(self._counter)
            return self.last


_IDS = _IdSource()


class AsyncRunner(Generic[T]):
    """Runs ``process(id, item)`` for each posted item on a worker thread, in order.

    The status of each item moves from PENDING to RUNNING to SUCCESS or FAILED;
    an exception raised by ``process`` counts as a failure.
    """

    def __init__(self, process: ProcessFunc) -> None:
        self._process = process
        self._queue: deque[tuple[int, T]] = deque()
        self._cond = threading.Condition()
        self._running = False
        self._exit = False

        self._status_lock = threading.Lock()
        self._status: dict[int, Status] = {}

        self._compl_id = INVALID_ID
        self._compl_cond = threading.Condition()

        self._thread = threading.Thread(target=self._working, daemon=True)
        self._thread.start()

    def __enter__(self) -> AsyncRunner[T]:
        return self

    def __exit__(self, *args: Any) -> None:
        self.release()

    def release(self) -> None:
        """Stop the worker after its current item; waiters are released."""
        with self._cond:
            self._exit = True
            self._cond.notify_all()
        with self._compl_cond:
            self._compl_cond.notify_all()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join()

    def _working(self) -> None:
        while True:
            with self._cond:
                if self._exit:
                    break
                if not self._queue:
                    self._running = False
                    self._cond.wait()
                    continue
                self._running = True
                task_id, item = self._queue.popleft()

            with self._status_lock:
                self._status[task_id] = Status.RUNNING

            try:
                ok = bool(self._process(task_id, item))
            except Exception:
                ok = False

            with self._status_lock:
                self._status[task_id] = Status.SUCCESS if ok else Status.FAILED

            with self._compl_cond:
                self._compl_id = task_id
                self._compl_cond.notify_all()

    def post(self, item: T, block: bool = False) -> int:
        """Queue ``item`` and return its id; with ``block`` wait until it is done."""
        with self._cond:
            task_id = _IDS.next()
            self._queue.append((task_id, item))
            with self._status_lock:
                self._status[task_id] = Status.PENDING
            self._running = True
            self._cond.notify()

        if block:
            self.wait(task_id)
        return task_id

    def wait(self, task_id: int) -> None:
        """Block until ``task_id`` has been processed, cleared, or the runner released."""
        with self._compl_cond:
            while not self._exit and task_id > self._compl_id:
                self._compl_cond.wait()

    def status(self, task_id: int) -> Status:
        """Status of ``task_id``; INVALID if the id is unknown."""
        with self._status_lock:
            return self._status.get(task_id, Status.INVALID)

    def clear(self) -> None:
        """Drop all queued items and forget every status; waiters return."""
        with self._cond:
            self._queue.clear()
            self._cond.notify_all()
        with self._compl_cond:
            self._compl_id = _IDS.last
            self._compl_cond.notify_all()
        with self._status_lock:
            self._status.clear()

    def running(self) -> bool:
        """True while the worker has items to process."""
        return self._running

    def items(self) -> list[tuple[int, T]]:
        """Snapshot of the queued ``(id, item)`` pairs not yet started."""
        with self._cond:
            return list(self._queue)


class MessageNotifier:
    """Forwards notifications to a callback as ``(msg, details_json, callback_arg)``."""

    def __init__(self, callback: Optional[Callback], callback_arg: Any = None) -> None:
        self._callback = callback
        self._callback_arg = callback_arg

    def notify(self, msg: str, details: Any = None) -> None:
        """Call the callback, if any, with ``details`` serialised to JSON."""
        if self._callback is None:
            return
        details_json = json.dumps(details, ensure_ascii=False, separators=(",", ":"))
        self._callback(str(msg), details_json, self._callback_arg)