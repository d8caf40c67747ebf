import asyncio
import logging
import signal
import sys
from typing import Coroutine, Set

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Asyncio tasks started by the launcher, cancelled together on shutdown."""

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def start(self, coro: Coroutine) -> asyncio.Task:
        """
        Start and track an asyncio task.

        The task is removed from the set automatically once completed.

        :param coro: The coroutine to execute as a task.
        :return: The created asyncio task.
        """
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def shutdown(self) -> None:
        """Cancel and await all tracked tasks."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.debug("Stopped %d background task(s)", len(tasks))

    def install_signal_handlers(self) -> None:
        """
        Bind ``SIGINT`` and ``SIGTERM`` to :meth:`shutdown`.

        .. note::
           Not supported on Windows; shutdown is driven by the webframe
           closing instead.
        """
        if sys.platform == "win32":
            logger.warning("Signal handlers are not supported on Windows; shutdown must be manual.")
            return
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda: asyncio.create_task(self.shutdown()))
