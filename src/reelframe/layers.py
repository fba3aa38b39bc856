"""Layer rendering for the branded reel frame.

Every tick redraws the whole canvas from scratch, bottom to top:

  ┌─────────────────────────────┐
  │ My Reel          ( Reel )   │  ← title bar (85% opaque) + accent badge
  ├─────────────────────────────┤
  │                             │
  │ ┌─────────────────────────┐ │
  │ │       video frame       │ │  ← letterboxed video
  │ └─────────────────────────┘ │
  │                             │  ← background fill
  └─────────────────────────────┘

Layer draws mutate the Surface image in place. None of them cache style
values between calls, so a style change shows up on the next tick.
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw

from .common import contrast_color, draw_text_centered_v, load_font, to_rgb
from .geometry import CanvasTarget, resolve_placement

logger = logging.getLogger(__name__)


# ── Constants ────────────────────────────────────────────────────

PAD = 24                          # outer padding around the title band
BAR_H = 96                        # title band height (panel is BAR_H + PAD)
TITLE_BAR_COLOR = (15, 21, 36)    # #0f1524
TITLE_BAR_ALPHA = 0.85
TITLE_FONT_SIZE = 36
TITLE_COLOR = (255, 255, 255)

BADGE_W = 140
BADGE_H = 36
BADGE_RADIUS = 18
BADGE_LABEL = "Reel"
BADGE_FONT_SIZE = 16
BADGE_LABEL_INSET = 20            # label x offset inside the pill

DEFAULT_TITLE = "My Reel"
DEFAULT_BACKGROUND = (11, 15, 20)   # #0b0f14
DEFAULT_ACCENT = (124, 58, 237)     # #7c3aed


# ── Style and surface ────────────────────────────────────────────


_COLOR_FIELDS = ("background_color", "accent_color")


@dataclass
class StyleConfig:
    """User-editable style. Mutate freely; each tick reads it afresh.

    Color fields accept hex strings or RGB sequences and are stored as
    (R, G, B) tuples, whether set at construction, by attribute or update().
    """

    title: str = DEFAULT_TITLE
    background_color: tuple[int, int, int] = DEFAULT_BACKGROUND
    accent_color: tuple[int, int, int] = DEFAULT_ACCENT

    def __setattr__(self, name, value):
        if name in _COLOR_FIELDS:
            value = to_rgb(value)
        super().__setattr__(name, value)

    def update(self, **changes) -> None:
        """Apply keyword changes; color values may be hex strings."""
        for key in changes:
            if key != "title" and key not in _COLOR_FIELDS:
                raise ValueError(f"Unknown style field: '{key}'")
        for key, value in changes.items():
            setattr(self, key, value)


@dataclass
class Surface:
    """Output raster shared between the session (writer) and exporter (reader)."""

    canvas: CanvasTarget
    image: Image.Image = field(init=False)
    frames_drawn: int = 0

    def __post_init__(self):
        self.image = Image.new("RGB", self.canvas.size, (0, 0, 0))

    def to_array(self) -> np.ndarray:
        return np.array(self.image)


# ── Layer draws ──────────────────────────────────────────────────


def draw_background(img: Image.Image, style: StyleConfig) -> None:
    """Fill the entire canvas with the background color."""
    draw = ImageDraw.Draw(img)
    draw.rectangle([(0, 0), img.size], fill=style.background_color)


def draw_video(img: Image.Image, source, canvas: CanvasTarget) -> bool:
    """Draw the current video frame letterboxed onto the canvas.

    Placement is recomputed from the source's current intrinsic size on
    every call. Any failure fetching or scaling the frame (source not yet
    decodable, decode stall) skips the layer for this tick.

    Returns:
        True if a frame was drawn.
    """
    if source is None:
        return False

    try:
        vw, vh = source.size
        placement = resolve_placement(canvas, vw, vh)
        x, y, w, h = placement.box()
        frame = Image.fromarray(source.current_frame()).convert("RGB")
        frame = frame.resize((w, h), resample=Image.BILINEAR)
    except Exception as exc:
        logger.debug("Skipping video layer this tick: %s", exc)
        return False

    img.paste(frame, (x, y))
    return True


def draw_title_bar(img: Image.Image, style: StyleConfig) -> None:
    """Blend the title panel across the top and write the title over it."""
    w = img.size[0]
    panel_h = min(BAR_H + PAD, img.size[1])

    # Alpha-blend the panel color over whatever is underneath.
    region = np.asarray(img.crop((0, 0, w, panel_h)), dtype=np.float32)
    color = np.array(TITLE_BAR_COLOR, dtype=np.float32)
    blended = region * (1 - TITLE_BAR_ALPHA) + color * TITLE_BAR_ALPHA
    img.paste(Image.fromarray(np.round(blended).astype(np.uint8)), (0, 0))

    # Title stays clear of the badge on the right.
    max_title_w = w - PAD - (BADGE_W + PAD) - PAD
    draw_text_centered_v(
        img, style.title, PAD, BAR_H / 2 + PAD / 2,
        load_font(TITLE_FONT_SIZE, bold=True), TITLE_COLOR,
        max_width=max_title_w,
    )


def badge_box(canvas_width: int) -> tuple[int, int, int, int]:
    """(x0, y0, x1, y1) of the accent pill, anchored top-right in the band."""
    x0 = canvas_width - PAD - BADGE_W
    y0 = PAD + (BAR_H - BADGE_H) // 2
    return (x0, y0, x0 + BADGE_W, y0 + BADGE_H)


def draw_accent_badge(img: Image.Image, style: StyleConfig) -> None:
    """Draw the accent pill with its short label."""
    x0, y0, x1, y1 = badge_box(img.size[0])
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle([(x0, y0), (x1, y1)], radius=BADGE_RADIUS, fill=style.accent_color)

    draw_text_centered_v(
        img, BADGE_LABEL, x0 + BADGE_LABEL_INSET, PAD + BAR_H / 2,
        load_font(BADGE_FONT_SIZE, bold=True), contrast_color(style.accent_color),
    )


# ── Full pass ────────────────────────────────────────────────────


def render_layers(surface: Surface, source, style: StyleConfig) -> bool:
    """Run one complete draw pass in fixed z-order.

    Returns:
        True if the video layer was drawn this pass.
    """
    img = surface.image
    draw_background(img, style)
    drew_video = draw_video(img, source, surface.canvas)
    draw_title_bar(img, style)
    draw_accent_badge(img, style)
    surface.frames_drawn += 1
    return drew_video
