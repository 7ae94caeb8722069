"""Tasks: futures that are polled with a waker until they complete."""

from __future__ import annotations

import contextvars
import enum
import itertools
import threading
from dataclasses import dataclass
from typing import Awaitable, Callable, Generator, Optional


class Poll(enum.Enum):
    """Outcome of polling a future once."""

    READY = enum.auto()
    PENDING = enum.auto()


class Waker:
    """Tells an executor that a pending task can make progress."""

    def __init__(self, wake: Optional[Callable[[], object]] = None) -> None:
        self._wake = wake

    def wake(self) -> None:
        """Signal that the owning task should be polled again."""
        if self._wake is not None:
            self._wake()


_current_waker: contextvars.ContextVar[Waker] = contextvars.ContextVar("current_waker")


def current_waker() -> Waker:
    """The waker of the task being polled right now."""
    try:
        return _current_waker.get()
    except LookupError:
        raise RuntimeError("no task is being polled") from None


class _Suspend:
    """An awaitable that is pending exactly once."""

    def __init__(self) -> None:
        self._pending = True

    def __await__(self) -> Generator[None, None, None]:
        while self._pending:
            self._pending = False
            yield


def suspend() -> _Suspend:
    """Return control to the executor once, without asking to be woken."""
    return _Suspend()


async def yield_now() -> None:
    """Return control to the executor once and ask to be polled again."""
    current_waker().wake()
    await _Suspend()


_ids = itertools.count()
_ids_lock = threading.Lock()


@dataclass(frozen=True, order=True)
class TaskId:
    """A unique, ordered task identifier."""

    value: int

    @classmethod
    def new(cls) -> TaskId:
        """Return an identifier never handed out before."""
        with _ids_lock:
            return cls(next(_ids))


class Task:
    """A future together with its identifier."""

    def __init__(self, future: Awaitable[None]) -> None:
        self.id = TaskId.new()
        self._steps = future.__await__()
        self.done = False

    def poll(self, waker: Waker) -> Poll:
        """Run the future until it suspends or finishes."""
        if self.done:
            raise RuntimeError("task polled after completion")
        token = _current_waker.set(waker)
        try:
            self._steps.send(None)
        except StopIteration:
            self.done = True
            return Poll.READY
        except BaseException:
            self.done = True
            raise
        finally:
            _current_waker.reset(token)
        return Poll.PENDING