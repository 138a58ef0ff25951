"""Bounded-wait combinator for backend round trips."""

import asyncio
import logging
from typing import Awaitable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeadlineExceeded(TimeoutError):
    """Raised when an awaitable does not finish before its deadline."""

    def __init__(self, seconds: float) -> None:
        super().__init__(f"operation exceeded {seconds:g}s deadline")
        self.seconds = seconds


async def with_deadline(awaitable: Awaitable[T], seconds: Optional[float]) -> T:
    """Await ``awaitable``, giving up after ``seconds``.

    On expiry the pending operation is cancelled and its eventual result is
    discarded. ``None`` disables the deadline.

    Raises:
        DeadlineExceeded: If the deadline passes first.
    """
    if seconds is None:
        return await awaitable

    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as exc:
        logger.debug("Deadline of %ss exceeded", seconds)
        raise DeadlineExceeded(seconds) from exc
