"""
In-memory task queue and the single-worker processor that drains it
"""
import asyncio
from collections import deque
from typing import Awaitable, Callable, Deque, Optional

from .logging_config import get_logger

logger = get_logger("task_queue")

Task = Callable[[], Awaitable[None]]


class MemoryTaskQueue:
    """FIFO queue of deferred async tasks. Single consumer only."""

    def __init__(self):
        self._tasks: Deque[Task] = deque()

    def enqueue(self, task: Task) -> None:
        self._tasks.append(task)

    def dequeue(self) -> Optional[Task]:
        """Remove and return the oldest task, or None when empty."""
        if not self._tasks:
            return None
        return self._tasks.popleft()

    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def clear(self) -> None:
        self._tasks.clear()


class SequentialQueueProcessor:
    """Drains a task queue one task at a time.

    At most one drain loop exists per processor, so at most one task is
    ever in flight. A task that raises is logged and skipped; the loop
    moves on to the next task without retrying.
    """

    def __init__(self, task_queue: MemoryTaskQueue, poll_interval: float = 0.1):
        self.task_queue = task_queue
        self.poll_interval = poll_interval
        self._processing = False
        self._stopped = False
        self._drain_task: Optional[asyncio.Task] = None

    async def start(self) -> None:
        """Drain the queue until it is empty. No-op if a drain is running."""
        if self._processing:
            return
        self._stopped = False
        self._processing = True
        await self._drain()

    def trigger_processing(self) -> Optional[asyncio.Task]:
        """Start a background drain if idle and return the active drain task.

        Safe to call repeatedly: while a drain is running (or stopped) no
        second loop is created.
        """
        if self._processing or self._stopped:
            return self._drain_task

        self._processing = True
        self._drain_task = asyncio.get_running_loop().create_task(self._drain())
        return self._drain_task

    async def stop(self) -> None:
        """Halt after the in-flight task finishes. Queued tasks are kept."""
        self._stopped = True
        while self._processing:
            await asyncio.sleep(self.poll_interval)

    def is_processing(self) -> bool:
        return self._processing

    def is_stopped(self) -> bool:
        return self._stopped

    def get_pending_task_count(self) -> int:
        return self.task_queue.size()

    async def wait_for_completion(self) -> None:
        """Poll until the queue is empty and no task is in flight.

        After stop() this returns once the in-flight task is done, even if
        tasks remain queued.
        """
        while self._processing or (not self.task_queue.is_empty() and not self._stopped):
            await asyncio.sleep(self.poll_interval)

    async def _drain(self) -> None:
        try:
            while not self._stopped:
                task = self.task_queue.dequeue()
                if task is None:
                    break

                try:
                    await task()
                except Exception:
                    logger.exception("Background task failed")
        finally:
            self._processing = False
            self._drain_task = None
