"""
Fire-and-forget background work.

Launched units run concurrently with the caller and are never awaited by
it. Before exiting, the host process applies a fixed grace delay as a
best-effort drain; units still running when it elapses are abandoned
without notice.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Optional, Set

from shared.logging import get_logger
from shared.metrics import MetricsCollector


class BackgroundTaskRunner:
    """Schedules detached units of work on the running event loop."""

    def __init__(self, name: str = "background", metrics: Optional[MetricsCollector] = None):
        self.name = name
        self.metrics = metrics
        self.logger = get_logger(f"proposals.{name}")
        # The event loop only keeps weak references to tasks
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of launched units that have not finished yet."""
        return len(self._tasks)

    def launch(self, work: Callable[[], Any], *, label: Optional[str] = None) -> None:
        """Start ``work`` without blocking the caller.

        Coroutine functions run on the event loop; plain callables run in a
        worker thread, and an awaitable they return is awaited on the loop.
        Must be called from inside a running event loop.
        """
        loop = asyncio.get_running_loop()
        label = label or getattr(work, "__name__", "work")
        if inspect.iscoroutinefunction(work):
            coro = work()
        else:
            coro = self._call_in_thread(work)

        task = loop.create_task(self._run(label, coro), name=f"{self.name}:{label}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._record("launched")
        self.logger.info("Background work launched", label=label, pending=self.pending)

    @staticmethod
    async def _call_in_thread(work: Callable[[], Any]) -> Any:
        result = await asyncio.to_thread(work)
        # lambdas and partials wrapping coroutine functions hand back a coroutine
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _run(self, label: str, coro) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            self.logger.warning("Background work cancelled", label=label)
            self._record("cancelled")
            raise
        except Exception as e:
            # Nobody awaits this task, so the failure ends here
            self.logger.error("Background work failed", label=label, error=str(e), exc_info=True)
            self._record("failed")
        else:
            self.logger.info("Background work completed", label=label)
            self._record("completed")

    def _record(self, status: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("background_tasks_total", status=status)


async def grace_delay(seconds: float, runner: Optional[BackgroundTaskRunner] = None) -> None:
    """Sleep for a fixed grace period before exit. Completion is not observed."""
    if runner is not None and runner.pending:
        get_logger("proposals.background").info(
            "Applying shutdown grace delay",
            seconds=seconds,
            pending=runner.pending
        )
    await asyncio.sleep(seconds)
