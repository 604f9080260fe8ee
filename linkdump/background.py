"""
Background task runner exposed to the hosting process
"""
import asyncio
from typing import Optional

from .task_queue import MemoryTaskQueue, SequentialQueueProcessor, Task
from .logging_config import get_logger

logger = get_logger("background")


class BackgroundTaskRunner:
    """Schedules deferred tasks onto a single sequentially drained queue.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        task_queue: Optional[MemoryTaskQueue] = None,
        queue_processor: Optional[SequentialQueueProcessor] = None,
        poll_interval: float = 0.1,
    ):
        self.task_queue = task_queue or MemoryTaskQueue()
        self.queue_processor = queue_processor or SequentialQueueProcessor(
            self.task_queue, poll_interval=poll_interval
        )

    def schedule(self, task: Task) -> None:
        """Enqueue a task and make sure a drain is running."""
        self.task_queue.enqueue(task)
        logger.debug("Scheduled background task (%d pending)", self.task_queue.size())
        self.queue_processor.trigger_processing()

    def schedule_delayed(self, task: Task, delay: float) -> asyncio.TimerHandle:
        """Schedule a task after delay seconds."""
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, self.schedule, task)

    def get_pending_task_count(self) -> int:
        return self.queue_processor.get_pending_task_count()

    async def wait_for_completion(self) -> None:
        await self.queue_processor.wait_for_completion()

    async def shutdown(self) -> None:
        """Stop draining after the in-flight task."""
        await self.queue_processor.stop()
