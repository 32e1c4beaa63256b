import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], Union[None, Awaitable[None]]]

# Milestones reported by the coordinator
NEGOTIATING = 0
NEGOTIATED = 10
TRANSFERRING = 20
TRANSFERRED = 90
COMPLETE = 100


class ProgressReporter:
    """Forwards percent milestones to an optional caller callback."""

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self._callback = callback
        self._last = -1

    @property
    def last(self) -> int:
        return self._last

    async def report(self, percent: int) -> None:
        """Report a value; it is clamped to 0..100 and never goes backwards."""
        value = max(0, min(100, int(percent)))
        if value < self._last:
            value = self._last
        self._last = value

        if self._callback is None:
            return
        try:
            result = self._callback(value)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error in progress callback at {value}%: {e}")
