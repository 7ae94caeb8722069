"""An executor that polls every pending task round-robin."""

from __future__ import annotations

from collections import deque

from omegaos.task import Poll, Task, Waker


def _dummy_waker() -> Waker:
    return Waker()


class SimpleExecutor:
    """Polls tasks in turn, ignoring wake-ups, until all have finished."""

    def __init__(self) -> None:
        self._task_queue: deque[Task] = deque()

    def __len__(self) -> int:
        return len(self._task_queue)

    def spawn(self, task: Task) -> None:
        """Append a task to the back of the queue."""
        self._task_queue.append(task)

    def run(self) -> None:
        """Poll tasks from the front, requeuing pending ones at the back."""
        while self._task_queue:
            task = self._task_queue.popleft()
            if task.poll(_dummy_waker()) is Poll.PENDING:
                self._task_queue.append(task)