from typing import Awaitable, Callable
import asyncio
import logging


class Poller:
    """
    Fixed-interval refresh clock.

    One task waits out the interval, awaits the callback to completion, then
    waits again, so two ticks of the same clock never run at the same time. A
    tick that overruns the interval pushes the next one back instead of
    stacking up. Stopping never interrupts a tick already in progress, and a
    clock restarted meanwhile only begins once that tick has finished.
    """
    def __init__(
            self,
            callback: Callable[[], Awaitable[None]],
            interval: float = 2.0,
            logger: logging.Logger | None = None
    ):
        self.callback = callback
        self.interval = interval
        self.logger = logger or logging.getLogger(__name__)
        self._task: asyncio.Task | None = None
        self._stopped: asyncio.Event | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stopped.is_set()

    def start(self):
        if self.running:
            return
        self._stopped = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stopped, self._task))
        self.logger.debug("Polling every %.1fs", self.interval)

    def stop(self):
        """
        Stop the clock. No tick starts after this returns; a tick that is
        already awaiting the store runs to completion.
        """
        if self._stopped is not None and not self._stopped.is_set():
            self._stopped.set()
            self.logger.debug("Polling stopped")

    async def aclose(self):
        """
        Stop the clock and wait for its task to finish.
        """
        self.stop()
        if self._task is not None:
            await self._task
            self._task = None

    async def _run(self, stopped: asyncio.Event, previous: asyncio.Task | None = None):
        # a restarted clock waits out the tick its predecessor still has in flight
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        while True:
            try:
                await asyncio.wait_for(stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass
            if stopped.is_set():
                return
            try:
                await self.callback()
            except Exception as e:
                self.logger.error("Poll tick failed: %s", e, exc_info=True)
