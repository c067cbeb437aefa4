"""
src/dispatch/queue.py
Bounded worker pool that runs units of work serially per key.
Exports: SerialDispatchQueue
"""

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Hashable

from src.common.errors import DispatchQueueClosedError
from src.shared import DEFAULT_MAX_WORKERS

logger = logging.getLogger(__name__)

UnitOfWork = Callable[[], None]
_DEFAULT_KEY = object()


class SerialDispatchQueue:
    """
    Runs submitted units of work on one shared thread pool.

    Units sharing a key never overlap and run in submission order. Units with
    different keys may run concurrently on separate workers.
    """

    def __init__(
        self,
        max_workers: int = DEFAULT_MAX_WORKERS,
        *,
        thread_name_prefix: str = "gitbucket-dispatch",
    ) -> None:
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=thread_name_prefix
        )
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._pending: dict[Hashable, deque[UnitOfWork]] = {}
        self._in_flight = 0
        self._completed = 0
        self._closed = False

    def submit(self, unit_of_work: UnitOfWork, key: Hashable | None = None) -> None:
        """
        Enqueue `unit_of_work` without waiting for it.

        Args:
            unit_of_work: Zero-argument callable; exceptions are logged.
            key: Serialization key. Units with equal keys never run concurrently.
        Raises:
            DispatchQueueClosedError: After `shutdown()`.
        """
        key = _DEFAULT_KEY if key is None else key
        with self._lock:
            if self._closed:
                raise DispatchQueueClosedError("Dispatch queue is shut down.")
            self._in_flight += 1
            chain = self._pending.get(key)
            if chain is not None:
                chain.append(unit_of_work)
                return
            self._pending[key] = deque([unit_of_work])
        try:
            self._executor.submit(self._drain, key)
        except RuntimeError as exc:
            with self._lock:
                dropped = self._pending.pop(key, deque())
                self._in_flight -= len(dropped)
                self._idle.notify_all()
            raise DispatchQueueClosedError("Dispatch queue refused new work.") from exc

    def _drain(self, key: Hashable) -> None:
        while True:
            with self._lock:
                chain = self._pending[key]
                if not chain:
                    del self._pending[key]
                    return
                unit_of_work = chain.popleft()
            try:
                unit_of_work()
            except Exception:
                logger.exception("Dispatch unit of work failed.")
            finally:
                with self._lock:
                    self._in_flight -= 1
                    self._completed += 1
                    self._idle.notify_all()

    def join(self, timeout: float | None = None) -> bool:
        """Block until every submitted unit finished. Returns False on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: self._in_flight == 0, timeout=timeout)

    @property
    def completed_count(self) -> int:
        with self._lock:
            return self._completed

    @property
    def pending_count(self) -> int:
        with self._lock:
            return self._in_flight

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for queued units to finish."""
        with self._lock:
            self._closed = True
        if wait:
            self.join()
        self._executor.shutdown(wait=wait)
