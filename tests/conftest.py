"""Shared test fixtures for reelframe tests."""

import subprocess

import numpy as np
import pytest
import imageio_ffmpeg

from reelframe.source import VideoSource

_FFMPEG = imageio_ffmpeg.get_ffmpeg_exe()


@pytest.fixture
def source_video(tmp_path):
    """Create a 2-second blue test video (320x240, 10fps) using ffmpeg.

    Shared across test_source.py and test_snapshot_cli.py.
    """
    out = tmp_path / "source.mp4"
    subprocess.run(
        [
            _FFMPEG, "-y",
            "-f", "lavfi", "-i", "color=c=blue:s=320x240:d=2:r=10",
            "-c:v", "libx264", "-crf", "28", "-pix_fmt", "yuv420p",
            str(out),
        ],
        check=True,
        capture_output=True,
    )
    return out


class FakeSource(VideoSource):
    """In-memory VideoSource: a solid-color frame of a given size."""

    def __init__(self, size=(1920, 1080), color=(255, 0, 0), fail=False):
        super().__init__()
        self._size = size
        self.color = color
        self.fail = fail
        self.frames_served = 0

    @property
    def size(self):
        return self._size

    def current_frame(self):
        if self.fail:
            raise RuntimeError("frame not decodable yet")
        self.frames_served += 1
        w, h = self._size
        return np.full((h, w, 3), self.color, dtype=np.uint8)


@pytest.fixture
def make_source():
    """Factory for FakeSource; pass ready=True to fire its signal up front."""
    def _make(size=(1920, 1080), color=(255, 0, 0), fail=False, ready=False):
        src = FakeSource(size=size, color=color, fail=fail)
        if ready:
            src.ready.fire()
        return src
    return _make
