"""
UI Dispatcher Module

The single UI-owning scheduling context. Background work hands results
back by posting tasks; the owning thread runs them in FIFO order.
"""

import logging
import queue
import threading
import time
from typing import Callable, Optional

from ..config import config


logger = logging.getLogger(__name__)


class UIDispatcher:
    """
    Task queue bound to the thread that created it.

    Any thread may post; only the owning thread may run tasks.
    """

    def __init__(self):
        """Bind the dispatcher to the current thread."""
        self._queue: "queue.Queue" = queue.Queue()
        self._owner = threading.get_ident()
        logger.debug(f"UIDispatcher bound to thread {self._owner}")

    def is_ui_thread(self) -> bool:
        """Check whether the caller is running on the UI thread."""
        return threading.get_ident() == self._owner

    def post(self, fn: Callable, *args, **kwargs) -> None:
        """Queue a task for the UI thread. Safe to call from any thread."""
        self._queue.put((fn, args, kwargs))

    def call_on_ui(self, fn: Callable, *args, **kwargs) -> None:
        """Run fn now when already on the UI thread, otherwise post it."""
        if self.is_ui_thread():
            fn(*args, **kwargs)
        else:
            self.post(fn, *args, **kwargs)

    @property
    def pending(self) -> int:
        """Approximate number of queued tasks."""
        return self._queue.qsize()

    def run_pending(self) -> int:
        """
        Run every task queued so far.

        Returns:
            Number of tasks executed.

        Raises:
            RuntimeError: If called from a thread other than the UI thread.
        """
        self._ensure_ui_thread()

        executed = 0
        while True:
            try:
                task = self._queue.get_nowait()
            except queue.Empty:
                break
            self._run(task)
            executed += 1

        return executed

    def run_until(
        self,
        predicate: Callable[[], bool],
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        on_idle: Optional[Callable[[], None]] = None
    ) -> bool:
        """
        Run tasks as they arrive until predicate() is true.

        Args:
            predicate: Checked after every task and every idle poll.
            timeout: Maximum seconds to wait (None waits forever).
            poll_interval: Seconds to block on the queue between checks
                (uses config default if None).
            on_idle: Called each time a poll times out with nothing to run.

        Returns:
            True if the predicate became true, False on timeout.
        """
        self._ensure_ui_thread()
        poll_interval = poll_interval or config.screen.poll_interval
        deadline = None if timeout is None else time.monotonic() + timeout

        while not predicate():
            if deadline is not None and time.monotonic() >= deadline:
                logger.debug("run_until timed out")
                return False

            try:
                task = self._queue.get(timeout=poll_interval)
            except queue.Empty:
                if on_idle is not None:
                    on_idle()
                continue

            self._run(task)

        return True

    def _run(self, task) -> None:
        fn, args, kwargs = task
        fn(*args, **kwargs)

    def _ensure_ui_thread(self) -> None:
        if not self.is_ui_thread():
            raise RuntimeError("UI tasks must run on the thread that owns the dispatcher")
