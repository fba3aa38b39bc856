"""Canvas geometry and letterbox placement.

The output canvas is a fixed portrait frame (9:16, 720x1280 by default).
Video frames are scaled to fit inside it with their aspect ratio intact,
centred, with uniform padding on one axis:

    wide source (16:9)          tall source (9:21)
  ┌──────────────────┐        ┌────┬────────┬────┐
  │     padding      │        │    │        │    │
  ├──────────────────┤        │    │ video  │    │
  │      video       │        │pad │        │pad │
  ├──────────────────┤        │    │        │    │
  │     padding      │        │    │        │    │
  └──────────────────┘        └────┴────────┴────┘
"""

from dataclasses import dataclass


DEFAULT_CANVAS_SIZE = (720, 1280)


@dataclass(frozen=True)
class CanvasTarget:
    """Fixed output dimensions for a composition session."""

    width: int = DEFAULT_CANVAS_SIZE[0]
    height: int = DEFAULT_CANVAS_SIZE[1]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def aspect(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class Placement:
    """Where the video frame lands on the canvas, in canvas pixels."""

    display_width: float
    display_height: float
    offset_x: float
    offset_y: float

    def box(self) -> tuple[int, int, int, int]:
        """Integer (x, y, w, h) rectangle for pasting, never smaller than 1px."""
        return (
            round(self.offset_x),
            round(self.offset_y),
            max(1, round(self.display_width)),
            max(1, round(self.display_height)),
        )


def resolve_placement(canvas: CanvasTarget, vw: float, vh: float) -> Placement:
    """Fit a vw x vh video inside the canvas, preserving its aspect ratio.

    Unknown dimensions (0 or None, e.g. before metadata has loaded) are
    treated as matching the canvas exactly, so the video fills the frame.

    Args:
        canvas: Output canvas.
        vw: Video intrinsic width.
        vh: Video intrinsic height.

    Returns:
        Placement with one axis fitted tightly and the other centred.
    """
    cw, ch = canvas.width, canvas.height
    if not vw or not vh:
        return Placement(float(cw), float(ch), 0.0, 0.0)

    video_aspect = vw / vh
    target_aspect = cw / ch

    if video_aspect >= target_aspect:
        # Relatively wider: fit width, letterbox top and bottom.
        display_w = float(cw)
        display_h = cw / video_aspect
    else:
        # Relatively taller: fit height, pillarbox left and right.
        display_h = float(ch)
        display_w = ch * video_aspect

    return Placement(
        display_width=display_w,
        display_height=display_h,
        offset_x=(cw - display_w) / 2,
        offset_y=(ch - display_h) / 2,
    )
