import asyncio
import logging
from typing import Coroutine, List, Set

logger = logging.getLogger(__name__)

class EffectScheduler:
    """
    Runs fire-and-forget side effects that follow a state transition
    (earnings refresh after a delivery, available-orders fetch on going online).

    Each effect is recorded by name when scheduled so callers can assert on
    what a transition triggered without waiting on it.
    """

    def __init__(self):
        self.scheduled: List[str] = []
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, name: str, effect: Coroutine) -> asyncio.Task:
        self.scheduled.append(name)
        task = asyncio.create_task(effect, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.debug(f"Scheduled effect '{name}'.")
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        if exc := task.exception():
            logger.error(f"Effect '{task.get_name()}' failed: {exc}", exc_info=exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Waits for every outstanding effect, including ones scheduled while draining."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
