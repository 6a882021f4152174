"""
Single-slot render scheduling.

At most one render is in flight. A request that arrives while the slot is
busy is dropped, not queued: the next request after completion picks up the
latest text anyway. There is no cancellation.

Results are handed back to the interactive context through `post`; the
default post puts callbacks on a queue that the interactive thread drains
with process_pending().
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional

from .pipeline import RenderResult

logger = logging.getLogger(__name__)

RenderFn = Callable[[str, Optional[Path]], RenderResult]
Deliver = Callable[[RenderResult], None]
Post = Callable[[Callable[[], None]], None]


class RenderSupervisor:
    def __init__(
        self,
        render_fn: RenderFn,
        deliver: Deliver,
        *,
        post: Optional[Post] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ):
        self._render_fn = render_fn
        self._deliver = deliver
        self._on_error = on_error
        self._pending: "queue.Queue[Callable[[], None]]" = queue.Queue()
        self._post: Post = post or self._pending.put
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mdpanel-render")
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._slot: Optional[Future] = None
        self._in_flight = 0
        self.accepted = 0
        self.dropped = 0

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._slot is not None

    def request(self, text: str, source_path: Optional[Path] = None) -> bool:
        """
        Starts a render if the slot is empty. Returns False if the request
        was dropped because a render is still in flight.
        """
        with self._lock:
            if self._slot is not None:
                self.dropped += 1
                logger.debug("render busy, request dropped")
                return False
            self.accepted += 1
            self._in_flight += 1
            fut = self._executor.submit(self._render_fn, text, source_path)
            self._slot = fut
        fut.add_done_callback(self._on_done)
        return True

    def _on_done(self, fut: Future) -> None:
        # the slot is freed before the result reaches the interactive context
        with self._lock:
            if self._slot is fut:
                self._slot = None
        try:
            exc = fut.exception()
            if exc is not None:
                logger.error("render failed: %s", exc, exc_info=exc)
                if self._on_error is not None:
                    handler = self._on_error
                    self._post(lambda: handler(exc))
            else:
                result = fut.result()
                self._post(lambda: self._deliver(result))
        finally:
            with self._idle:
                self._in_flight -= 1
                self._idle.notify_all()

    def process_pending(self, timeout: Optional[float] = None) -> int:
        """
        Runs delivered callbacks on the calling (interactive) thread.
        With a timeout, waits up to that long for the first one.
        Returns the number of callbacks executed.
        """
        count = 0
        block = timeout is not None
        while True:
            try:
                cb = self._pending.get(block=block, timeout=timeout) if block else self._pending.get_nowait()
            except queue.Empty:
                return count
            block = False
            cb()
            count += 1

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Blocks until the in-flight render has finished and its result has
        been posted. Returns False on timeout.
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._in_flight == 0, timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)


__all__ = ["RenderSupervisor"]
