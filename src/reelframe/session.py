"""Render session — the composition loop and its lifecycle.

A RenderSession binds one VideoSource, a StyleConfig and a CanvasTarget
to a per-refresh draw loop:

    IDLE ──attach──▶ ARMED ──ready──▶ RUNNING ──stop/detach──▶ STOPPED
                       ▲                  │                       │
                       └──────attach──────┴───────attach──────────┘

The session is the only owner of the pending-frame token. Every exit
from RUNNING cancels it synchronously, and every scheduled tick carries
the arm generation it was scheduled under, so a tick that slips through
after a source swap draws nothing.
"""

import enum
import functools
import logging

from .geometry import CanvasTarget
from .layers import StyleConfig, Surface, render_layers

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"
    STOPPED = "stopped"


class RenderSession:
    """Continuous compositor for one output surface.

    Args:
        scheduler: FrameScheduler providing per-refresh callbacks.
        style: Initial style; mutate session.style at any time.
        canvas: Output dimensions, fixed for the session's lifetime.
    """

    def __init__(self, scheduler, style: StyleConfig | None = None, canvas: CanvasTarget | None = None):
        self.scheduler = scheduler
        self.style = style if style is not None else StyleConfig()
        self.canvas = canvas if canvas is not None else CanvasTarget()
        self.surface = Surface(self.canvas)
        self.state = SessionState.IDLE
        self.source = None
        self._generation = 0
        self._pending = None
        self._unsubscribe_ready = None

    @property
    def frames_drawn(self) -> int:
        return self.surface.frames_drawn

    # ── Lifecycle ─────────────────────────────────────────────────

    def attach(self, source) -> None:
        """Arm the session with a new source.

        Any running loop or outstanding readiness subscription for the
        previous source is cancelled first. The loop starts when the
        source's readiness signal fires (immediately if it already has).
        """
        self._cancel()
        self._generation += 1
        self.source = source
        self._set_state(SessionState.ARMED)

        generation = self._generation
        unsubscribe = source.ready.subscribe(
            functools.partial(self._on_ready, generation)
        )
        # An already-fired signal starts the loop inside subscribe().
        if self.state is SessionState.ARMED:
            self._unsubscribe_ready = unsubscribe

    def stop(self) -> None:
        """Cancel the loop. Idempotent; the surface keeps its last frame."""
        if self.state is SessionState.IDLE:
            return
        self._cancel()
        if self.state is not SessionState.STOPPED:
            self._set_state(SessionState.STOPPED)

    def detach(self):
        """Stop and drop the current source; returns it for the caller to close."""
        self.stop()
        source, self.source = self.source, None
        return source

    # ── Loop ──────────────────────────────────────────────────────

    def _on_ready(self, generation: int) -> None:
        if generation != self._generation or self.state is not SessionState.ARMED:
            return
        self._unsubscribe_ready = None
        self._set_state(SessionState.RUNNING)
        self._schedule()

    def _schedule(self) -> None:
        self._pending = self.scheduler.request_frame(
            functools.partial(self._tick, generation=self._generation)
        )

    def _tick(self, timestamp: float, generation: int) -> None:
        if generation != self._generation or self.state is not SessionState.RUNNING:
            return
        self._pending = None
        try:
            render_layers(self.surface, self.source, self.style)
        except Exception:
            # A bad pass skips this refresh; the loop keeps running.
            logger.exception("Frame render failed; retrying next refresh")
        if generation == self._generation and self.state is SessionState.RUNNING:
            self._schedule()

    def _cancel(self) -> None:
        if self._pending is not None:
            self.scheduler.cancel_frame(self._pending)
            self._pending = None
        if self._unsubscribe_ready is not None:
            self._unsubscribe_ready()
            self._unsubscribe_ready = None

    def _set_state(self, state: SessionState) -> None:
        logger.debug("Render session %s -> %s", self.state.value, state.value)
        self.state = state
