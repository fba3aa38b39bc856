"""Video source handles and the one-shot readiness signal.

A session never decodes video itself. It is handed a VideoSource: an
object that reports its intrinsic size (0x0 until metadata is known),
returns the current frame as an RGB numpy array, and exposes a
ReadySignal that fires once the source can be drawn.

ClipSource is the stock implementation, backed by moviepy's
VideoFileClip (ffmpeg reads local paths and http(s) URLs alike).
"""

import logging
import time

import numpy as np
from moviepy import VideoFileClip

logger = logging.getLogger(__name__)


class ReadySignal:
    """One-shot notification, future-like.

    Subscribers are called exactly once. Subscribing after the signal
    has fired calls the subscriber immediately.
    """

    def __init__(self):
        self._fired = False
        self._subscribers = []

    @property
    def fired(self) -> bool:
        return self._fired

    def subscribe(self, callback):
        """Register *callback* and return a function that unregisters it."""
        if self._fired:
            callback()
            return lambda: None

        self._subscribers.append(callback)

        def _unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return _unsubscribe

    def fire(self) -> None:
        if self._fired:
            return
        self._fired = True
        subscribers, self._subscribers = self._subscribers, []
        for callback in subscribers:
            callback()


class VideoSource:
    """Interface for a decodable media stream."""

    def __init__(self):
        self.ready = ReadySignal()

    @property
    def size(self) -> tuple[int, int]:
        """Intrinsic (width, height), or (0, 0) while unknown."""
        return (0, 0)

    def current_frame(self) -> np.ndarray:
        """Return the frame to show now, shape (h, w, 3), dtype uint8."""
        raise NotImplementedError

    def close(self) -> None:
        pass


class ClipSource(VideoSource):
    """VideoSource backed by a moviepy clip that loops forever.

    Args:
        location: Local path or http(s) URL of the video.
        clock: Optional zero-arg callable returning the playback time in
            seconds. Defaults to wall-clock time since open(). Pass a
            constant for deterministic snapshots.
    """

    def __init__(self, location: str, clock=None):
        super().__init__()
        self.location = str(location)
        self._clock = clock
        self._clip = None
        self._opened_at = None

    @property
    def size(self) -> tuple[int, int]:
        if self._clip is None:
            return (0, 0)
        w, h = self._clip.size
        return (int(w), int(h))

    def open(self) -> "ClipSource":
        """Load clip metadata and fire the readiness signal.

        Raises whatever moviepy raises for an unreadable source
        (typically OSError); the signal does not fire in that case.
        """
        if self._clip is None:
            logger.debug("Opening video source %s", self.location)
            # Muted preview: audio is never read.
            self._clip = VideoFileClip(self.location, audio=False)
            self._opened_at = time.monotonic()
        self.ready.fire()
        return self

    def playback_time(self) -> float:
        if self._clock is not None:
            t = float(self._clock())
        else:
            t = time.monotonic() - (self._opened_at or time.monotonic())
        duration = self._clip.duration if self._clip is not None else None
        if duration:
            # Loop playback; stay clear of the final frame boundary
            # where ffmpeg may have nothing left to decode.
            t = t % duration
            t = min(t, max(0.0, duration - 1.0 / (self._clip.fps or 30)))
        return max(0.0, t)

    def current_frame(self) -> np.ndarray:
        if self._clip is None:
            raise RuntimeError(f"Video source not open: {self.location}")
        frame = self._clip.get_frame(self.playback_time())
        return np.asarray(frame, dtype=np.uint8)

    def close(self) -> None:
        if self._clip is not None:
            self._clip.close()
            self._clip = None
