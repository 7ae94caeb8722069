"""An executor that polls only tasks whose wakers have fired."""

from __future__ import annotations

import threading
from collections import deque
from functools import partial
from typing import Optional

from omegaos.task import Poll, Task, TaskId, Waker

TASK_QUEUE_CAPACITY = 100


class QueueFullError(RuntimeError):
    """The bounded task queue has no room left."""


class _TaskQueue:
    """A bounded, thread-safe FIFO of task identifiers."""

    def __init__(self, capacity: int) -> None:
        self._items: deque[TaskId] = deque()
        self._capacity = capacity
        self._condition = threading.Condition()

    def push(self, task_id: TaskId) -> None:
        with self._condition:
            if len(self._items) >= self._capacity:
                raise QueueFullError("task queue full")
            self._items.append(task_id)
            self._condition.notify_all()

    def pop(self) -> Optional[TaskId]:
        with self._condition:
            return self._items.popleft() if self._items else None

    def wait_nonempty(self) -> None:
        with self._condition:
            self._condition.wait_for(lambda: bool(self._items))


class Executor:
    """Runs tasks, polling each one again only after it is woken."""

    def __init__(self, capacity: int = TASK_QUEUE_CAPACITY) -> None:
        self._tasks: dict[TaskId, Task] = {}
        self._task_queue = _TaskQueue(capacity)
        self._waker_cache: dict[TaskId, Waker] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, task: Task) -> None:
        """Add a task and queue it for its first poll."""
        if task.id in self._tasks:
            raise ValueError("task with same ID already in tasks")
        self._tasks[task.id] = task
        self._task_queue.push(task.id)

    def run_ready_tasks(self) -> None:
        """Poll every queued task until the queue is empty."""
        while (task_id := self._task_queue.pop()) is not None:
            task = self._tasks.get(task_id)
            if task is None:
                continue  # task no longer exists
            waker = self._waker_cache.get(task_id)
            if waker is None:
                waker = Waker(partial(self._task_queue.push, task_id))
                self._waker_cache[task_id] = waker
            if task.poll(waker) is Poll.READY:
                del self._tasks[task_id]
                del self._waker_cache[task_id]

    def run(self) -> None:
        """Run tasks, sleeping while idle, until none remain."""
        while True:
            self.run_ready_tasks()
            if not self._tasks:
                return
            self._task_queue.wait_nonempty()