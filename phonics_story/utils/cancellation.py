"""Cooperative cancellation shared by every network call of a pipeline run."""

import asyncio
from typing import Optional

from ..errors import CancellationError


class CancellationToken:
    """One-shot cancellation flag that coroutines can await.

    A token is armed once per run and threaded through every chat call.
    ``cancel_after`` turns it into a deadline.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._timer: Optional[asyncio.TimerHandle] = None
        self.reason = "operation cancelled"

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._event.is_set():
            return
        if reason:
            self.reason = reason
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def cancel_after(self, seconds: float) -> None:
        """Cancel the token after ``seconds``. Must be called from a running loop."""
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(
            seconds, self.cancel, f"operation cancelled after {seconds:g}s timeout"
        )

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise CancellationError(self.reason)

    async def wait(self) -> None:
        await self._event.wait()
