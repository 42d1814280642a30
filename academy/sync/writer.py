"""Best-effort, unacknowledged remote writes.

Writes go through a bounded queue drained by one worker thread. Callers never
block and never see a failure: a full queue drops the write, a failing write
is logged and counted. There is no retry; local and remote state may diverge
until the next full load.
"""
from __future__ import annotations

import logging
import queue
import threading
from typing import Any, Callable, Tuple

logger = logging.getLogger(__name__)

Job = Tuple[str, Callable[..., Any], tuple]


class BestEffortWriter:
    def __init__(self, max_pending: int = 256, threaded: bool = True) -> None:
        self.threaded = threaded
        self.submitted = 0
        self.dropped = 0
        self.failed = 0
        self.last_error: str | None = None
        self._pending = 0
        self._queue: "queue.Queue[Job | None]" = queue.Queue(maxsize=max_pending)
        self._worker: threading.Thread | None = None
        # Guards the counters above; waiters in flush() are woken when _pending hits zero
        self._lock = threading.Condition()

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(target=self._drain, name="remote-writer", daemon=True)
                self._worker.start()

    def submit(self, label: str, fn: Callable[..., Any], *args: Any) -> bool:
        with self._lock:
            self.submitted += 1
        if not self.threaded:
            self._run(label, fn, args)
            return True
        self._ensure_worker()
        with self._lock:
            try:
                self._queue.put_nowait((label, fn, args))
            except queue.Full:
                self.dropped += 1
                logger.warning("Remote write dropped, queue full: %s", label)
                return False
            self._pending += 1
        return True

    def _run(self, label: str, fn: Callable[..., Any], args: tuple) -> None:
        try:
            fn(*args)
            logger.debug("Remote write ok: %s", label)
        except Exception as e:
            with self._lock:
                self.failed += 1
                self.last_error = f"{label}: {e}"
            logger.error("Remote write failed: %s (%s)", label, e)

    def _drain(self) -> None:
        while True:
            job = self._queue.get()
            if job is None:
                return
            label, fn, args = job
            try:
                self._run(label, fn, args)
            finally:
                with self._lock:
                    self._pending -= 1
                    if self._pending == 0:
                        self._lock.notify_all()

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending

    def flush(self, timeout: float | None = None) -> bool:
        """Wait until every queued write has been attempted. False on timeout."""
        if not self.threaded:
            return True
        with self._lock:
            return self._lock.wait_for(lambda: self._pending == 0, timeout)

    def reset_failures(self) -> None:
        with self._lock:
            self.failed = 0
            self.dropped = 0
            self.last_error = None

    def close(self, timeout: float | None = 5.0) -> None:
        if not self.threaded or self._worker is None:
            return
        self.flush(timeout)
        try:
            self._queue.put(None, timeout=timeout)
        except queue.Full:
            logger.warning("Remote writer still busy on close, %d writes pending", self.pending)
            return
        self._worker.join(timeout)
        self._worker = None
