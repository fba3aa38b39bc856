"""Per-refresh frame scheduling.

The composition loop never sleeps or spins. It asks a FrameScheduler for
a callback on the next display refresh and gets back a token it can
cancel. Two hosts are provided:

  - AsyncioFrameScheduler: drives callbacks from an asyncio event loop,
    aligned to a virtual display clock (next refresh boundary).
  - ManualFrameScheduler: headless; the host calls step() once per
    refresh. Deterministic, used for snapshots and tests.
"""

import asyncio
import itertools
import math


class FrameScheduler:
    """Interface: one-shot callbacks on the next display refresh."""

    def request_frame(self, callback):
        """Schedule callback(timestamp) for the next refresh; return a token."""
        raise NotImplementedError

    def cancel_frame(self, token) -> None:
        """Cancel a pending callback. Unknown or spent tokens are ignored."""
        raise NotImplementedError


class ManualFrameScheduler(FrameScheduler):
    """Scheduler whose refreshes are driven explicitly by step().

    Args:
        refresh_rate: Virtual refresh rate in Hz; sets the timestamp
            passed to callbacks (frame_index / refresh_rate).
    """

    def __init__(self, refresh_rate: float = 60.0):
        self.refresh_rate = refresh_rate
        self.frame_index = 0
        self._ids = itertools.count(1)
        self._pending: dict[int, object] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback):
        token = next(self._ids)
        self._pending[token] = callback
        return token

    def cancel_frame(self, token) -> None:
        self._pending.pop(token, None)

    def step(self) -> int:
        """Emulate one display refresh.

        Runs the callbacks pending when the step began, in request order.
        Callbacks requested during the step wait for the next one.
        Returns the number of callbacks run.
        """
        timestamp = self.frame_index / self.refresh_rate
        self.frame_index += 1
        due = list(self._pending.items())
        ran = 0
        for token, callback in due:
            # A callback earlier in this step may have cancelled this one.
            if self._pending.pop(token, None) is None:
                continue
            callback(timestamp)
            ran += 1
        return ran

    def run(self, frames: int) -> None:
        for _ in range(frames):
            self.step()


class AsyncioFrameScheduler(FrameScheduler):
    """Scheduler backed by an asyncio event loop.

    Callbacks fire on the next refresh boundary of a virtual display
    running at refresh_rate Hz, measured on the event loop clock.
    """

    def __init__(self, refresh_rate: float = 60.0, loop: asyncio.AbstractEventLoop | None = None):
        if refresh_rate <= 0:
            raise ValueError(f"refresh_rate must be > 0, got {refresh_rate}")
        self.refresh_rate = refresh_rate
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def next_refresh(self, now: float) -> float:
        """Time of the first refresh boundary strictly after *now*."""
        boundary = math.floor(now * self.refresh_rate) + 1
        return boundary / self.refresh_rate

    def request_frame(self, callback):
        loop = self.loop
        when = self.next_refresh(loop.time())
        return loop.call_at(when, callback, when)

    def cancel_frame(self, token) -> None:
        if token is not None:
            token.cancel()
