"""Snapshot export — encode the output surface as a PNG.

Reads the surface as it stands; never triggers a draw. Between ticks
this is the most recently completed frame.
"""

import io
from pathlib import Path

SNAPSHOT_FILENAME = "frame.png"


class ExportUnavailable(RuntimeError):
    """No surface exists yet, or nothing has been drawn on it."""


def export_snapshot(surface) -> bytes:
    """Encode the surface's current pixels as PNG bytes.

    Raises:
        ExportUnavailable: surface is None or has zero completed draws.
    """
    if surface is None:
        raise ExportUnavailable("No output surface to export")
    if surface.frames_drawn == 0:
        raise ExportUnavailable("No frame has been drawn yet")

    buf = io.BytesIO()
    # Copy so encoding sees a stable snapshot of the pixels.
    surface.image.copy().save(buf, format="PNG")
    return buf.getvalue()


def save_snapshot(surface, output_dir: str | Path = ".", filename: str = SNAPSHOT_FILENAME) -> Path:
    """Export the surface and write it to output_dir/filename.

    Returns:
        Path of the written file.
    """
    data = export_snapshot(surface)
    out = Path(output_dir) / filename
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    return out
