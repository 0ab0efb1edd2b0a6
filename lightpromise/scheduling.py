import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class TimerHandleLike(Protocol):
    def cancel(self) -> None: ...
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    """A cancellable delay primitive.

    `call_later(delay, callback, *args)` runs `callback(*args)` once after
    `delay` seconds and returns a handle whose `cancel()` prevents the call.
    """

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandleLike: ...


class AsyncioScheduler:
    """Schedules delayed callbacks on the running asyncio event loop."""

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> asyncio.TimerHandle:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RuntimeError('timeout() requires a running event loop') from exc
        logger.debug('scheduling %r in %.3fs', callback, delay)
        return loop.call_later(delay, callback, *args)

    def __repr__(self) -> str:
        return 'AsyncioScheduler()'
