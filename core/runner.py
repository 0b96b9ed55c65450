"""Asyncio runner: the clock, motion and spawn timers of one live round."""

import asyncio
import logging

from .config import CLOCK_TICK_SECONDS, MOTION_TICK_SECONDS, SPAWN_INTERVAL_SECONDS
from .engine import RoundEngine

logger = logging.getLogger(__name__)


class RoundRunner:
    """Drives a RoundEngine with three periodic tasks on the running loop.

    Every task is cancelled when the round finishes, restarts or stops. Each
    tick also carries the generation it was started for, so a callback that
    slips past cancellation changes nothing.
    """

    def __init__(self, engine: RoundEngine, clock_interval: float = CLOCK_TICK_SECONDS,
                 motion_interval: float = MOTION_TICK_SECONDS,
                 spawn_interval: float = SPAWN_INTERVAL_SECONDS):
        self.engine = engine
        self.clock_interval = clock_interval
        self.motion_interval = motion_interval
        self.spawn_interval = spawn_interval
        self.tasks: list[asyncio.Task] = []
        self.finished = asyncio.Event()
        engine.add_finish_listener(self._on_finish)

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self.tasks)

    def start(self) -> int:
        """Start a fresh round and its timers. Must be called inside a running loop."""
        self._cancel_tasks()
        self.finished.clear()
        generation = self.engine.start()
        loop = asyncio.get_running_loop()
        self.tasks = [
            loop.create_task(self._periodic(self.clock_interval, self.engine.tick_clock, generation),
                             name=f"round-clock-{generation}"),
            loop.create_task(self._periodic(self.motion_interval, self.engine.tick_motion, generation),
                             name=f"round-motion-{generation}"),
            loop.create_task(self._periodic(self.spawn_interval, self.engine.tick_spawn, generation),
                             name=f"round-spawn-{generation}"),
        ]
        return generation

    async def restart(self) -> int:
        await self._cancel_and_wait()
        return self.start()

    async def stop(self) -> None:
        await self._cancel_and_wait()
        self.engine.stop()

    async def wait_finished(self, timeout: float | None = None) -> bool:
        try:
            await asyncio.wait_for(self.finished.wait(), timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def _periodic(self, interval: float, action, generation: int) -> None:
        while True:
            await asyncio.sleep(interval)
            if generation != self.engine.generation or self.engine.is_over:
                return
            action(generation)

    def _on_finish(self, result) -> None:
        self.finished.set()
        self._cancel_tasks()

    def _cancel_tasks(self) -> None:
        current = asyncio.current_task() if self._in_loop() else None
        for task in self.tasks:
            if task is not current and not task.done():
                task.cancel()

    async def _cancel_and_wait(self) -> None:
        self._cancel_tasks()
        current = asyncio.current_task()
        pending = [t for t in self.tasks if t is not current]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self.tasks = []

    @staticmethod
    def _in_loop() -> bool:
        try:
            asyncio.get_running_loop()
            return True
        except RuntimeError:
            return False
