"""
Interval jobs

A job runs once as soon as it starts and then every `interval_ms`. Each run
is its own task, so a slow run never delays the next tick; runs can overlap
and jobs that care must guard against that themselves. A failing run is
logged and the timer keeps going.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set

logger = logging.getLogger(__name__)

RunFn = Callable[[Any], Awaitable[Any]]
StopFn = Callable[[], None]
CleanupFn = Callable[[], None]


class IntervalJob:
    """Recurring task on a fixed period"""

    def __init__(self, name: str, interval_ms: int, run: RunFn, cleanup: Optional[CleanupFn] = None):
        """
        Args:
            name: job name used in logs
            interval_ms: period between ticks in milliseconds
            run: coroutine function called with the job context on every tick
            cleanup: releases resources held by `run` when the runner shuts down
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.name = name
        self.interval_ms = interval_ms
        self.run = run
        self.cleanup = cleanup
        self._timer: Optional[asyncio.Task] = None
        self._runs: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    async def _guarded_run(self, context: Any, label: str) -> None:
        try:
            await self.run(context)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("[job] %s %s error", self.name, label)

    def _spawn(self, context: Any, label: str) -> None:
        task = asyncio.create_task(self._guarded_run(context, label), name=f"{self.name}:{label}")
        self._runs.add(task)
        task.add_done_callback(self._runs.discard)

    async def _tick_forever(self, context: Any) -> None:
        period = self.interval_ms / 1000
        while True:
            await asyncio.sleep(period)
            self._spawn(context, "run")

    def start(self, context: Any = None) -> StopFn:
        """
        Start the job; must be called from a running event loop

        Args:
            context: object passed to every run (the Discord client)

        Returns:
            stop function cancelling future ticks, safe to call more than once
        """
        if self.running:
            raise RuntimeError(f"job {self.name} is already running")

        self._timer = asyncio.create_task(self._tick_forever(context), name=f"{self.name}:timer")
        self._spawn(context, "initial run")
        return self.stop

    def stop(self) -> None:
        # in-progress runs are left to finish
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class JobRunner:
    """Registry that starts and stops all interval jobs together"""

    def __init__(self):
        self.registered: List[IntervalJob] = []
        self._stop_fns: List[StopFn] = []
        self.running: List[str] = []

    def register(self, job: IntervalJob) -> None:
        self.registered.append(job)
        logger.info("[job] registered %s every %dms", job.name, job.interval_ms)

    def start_all(self, context: Any = None) -> None:
        for job in self.registered:
            try:
                stop = job.start(context)
            except Exception:
                logger.exception("[job] failed to start %s", job.name)
                continue
            self._stop_fns.append(stop)
            self.running.append(job.name)
            logger.info("[job] started %s", job.name)

    def stop_all(self) -> None:
        for stop in self._stop_fns:
            try:
                stop()
            except Exception:
                logger.exception("[job] error stopping job")
        self._stop_fns = []
        self.running = []

        for job in self.registered:
            if job.cleanup is None:
                continue
            try:
                job.cleanup()
            except Exception:
                logger.exception("[job] error cleaning up %s", job.name)
