"""An asynchronous stream of keyboard scancodes."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Generator, Optional

from omegaos.task import Waker, current_waker

SCANCODE_QUEUE_CAPACITY = 100

logger = logging.getLogger(__name__)


class _AtomicWaker:
    """Holds at most one registered waker; waking consumes it."""

    def __init__(self) -> None:
        self._waker: Optional[Waker] = None
        self._lock = threading.Lock()

    def register(self, waker: Waker) -> None:
        with self._lock:
            self._waker = waker

    def take(self) -> Optional[Waker]:
        with self._lock:
            waker, self._waker = self._waker, None
            return waker

    def wake(self) -> None:
        waker = self.take()
        if waker is not None:
            waker.wake()


class _NextScancode:
    def __init__(self, stream: ScancodeStream) -> None:
        self._stream = stream

    def __await__(self) -> Generator[None, None, int]:
        while True:
            scancode = self._stream.poll_next(current_waker())
            if scancode is not None:
                return scancode
            yield


class ScancodeStream:
    """Scancodes pushed by the keyboard side, consumed asynchronously."""

    def __init__(self, capacity: int = SCANCODE_QUEUE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("scancode queue capacity must be positive")
        self._queue: deque[int] = deque()
        self._capacity = capacity
        self._lock = threading.Lock()
        self._waker = _AtomicWaker()

    def add_scancode(self, scancode: int) -> bool:
        """Queue a scancode and wake the reader; False if it was dropped."""
        if not 0 <= scancode <= 0xFF:
            raise ValueError(f"{scancode} is not a scancode byte")
        with self._lock:
            if len(self._queue) >= self._capacity:
                logger.warning("scancode queue full; dropping keyboard input")
                return False
            self._queue.append(scancode)
        self._waker.wake()
        return True

    def _pop(self) -> Optional[int]:
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def poll_next(self, waker: Waker) -> Optional[int]:
        """The next scancode, or None after registering ``waker`` for later."""
        scancode = self._pop()
        if scancode is not None:
            return scancode
        self._waker.register(waker)
        scancode = self._pop()
        if scancode is not None:
            self._waker.take()
        return scancode

    def __aiter__(self) -> ScancodeStream:
        return self

    def __anext__(self) -> _NextScancode:
        return _NextScancode(self)