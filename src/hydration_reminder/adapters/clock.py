"""Wall-clock and timer adapter."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Handle returned for a scheduled callback."""

    def cancel(self) -> None:
        """Stop the callback from running again."""


class Clock(Protocol):
    """Interface for reading the time and scheduling callbacks."""

    def now(self) -> datetime:
        """Return the current local wall-clock time."""

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Run the callback once after the delay."""

    def schedule_every(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> TimerHandle:
        """Run the callback repeatedly, each run spaced from the previous one."""


@dataclass
class _OneShotTimer:
    handle: asyncio.TimerHandle

    def cancel(self) -> None:
        self.handle.cancel()


@dataclass
class _RepeatingTimer:
    loop: asyncio.AbstractEventLoop
    interval_seconds: float
    callback: Callable[[], None]
    cancelled: bool = False
    _handle: asyncio.TimerHandle | None = field(default=None, repr=False)

    def start(self) -> None:
        self._handle = self.loop.call_later(self.interval_seconds, self._run)

    def _run(self) -> None:
        try:
            self.callback()
        except Exception:
            logger.exception("Scheduled callback failed")
        # The callback may cancel its own timer.
        if not self.cancelled:
            self.start()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


@dataclass
class AsyncioClock(Clock):
    """Clock backed by the running asyncio event loop."""

    def now(self) -> datetime:
        return datetime.now()

    def schedule_after(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        loop = asyncio.get_running_loop()
        return _OneShotTimer(handle=loop.call_later(delay_ms / 1000, callback))

    def schedule_every(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> TimerHandle:
        timer = _RepeatingTimer(
            loop=asyncio.get_running_loop(),
            interval_seconds=interval_ms / 1000,
            callback=callback,
        )
        timer.start()
        return timer
