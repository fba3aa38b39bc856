"""reelframe.common — shared utilities for frame composition.

Contains: color parsing, path variable resolution, font loading,
and text measurement/rendering on Pillow images.
"""

import re
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont


# ── Font paths ─────────────────────────────────────────────────────
# Bold faces first for the title, regular faces for small labels.
# DejaVu ships with nearly every Linux distro, so it is the fallback.

BOLD_FONT_PATHS = [
    Path.home() / ".local/share/fonts/Inter-Bold.ttf",
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf"),
]

FONT_PATHS = [
    Path.home() / ".local/share/fonts/Inter.ttc",
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
]


# ── Color utilities ────────────────────────────────────────────────

def parse_hex_color(hex_str: str) -> tuple[int, int, int]:
    """Convert '#RRGGBB' or 'RRGGBB' string to (R, G, B) tuple."""
    hex_str = hex_str.strip().lstrip("#")
    if len(hex_str) != 6 or not all(c in "0123456789abcdefABCDEF" for c in hex_str):
        raise ValueError(f"Invalid hex color: '#{hex_str}'")
    return (int(hex_str[0:2], 16), int(hex_str[2:4], 16), int(hex_str[4:6], 16))


def to_rgb(value) -> tuple[int, int, int]:
    """Coerce a hex string or 3-item sequence to an (R, G, B) tuple."""
    if isinstance(value, str):
        return parse_hex_color(value)
    rgb = tuple(int(c) for c in value)
    if len(rgb) != 3 or any(c < 0 or c > 255 for c in rgb):
        raise ValueError(f"Invalid RGB color: {value!r}")
    return rgb


def contrast_color(
    background: tuple[int, int, int],
    light: tuple[int, int, int] = (255, 255, 255),
    dark: tuple[int, int, int] = (17, 17, 17),
) -> tuple[int, int, int]:
    """Pick light or dark text for legibility on *background*.

    Uses Rec. 709 relative luminance with a midpoint threshold.
    """
    r, g, b = background
    luminance = (0.2126 * r + 0.7152 * g + 0.0722 * b) / 255
    return dark if luminance > 0.6 else light


# ── Path utilities ─────────────────────────────────────────────────

def resolve_path_vars(text: str, paths: dict[str, str]) -> str:
    """Replace ${name} variables in a string using the paths dict."""
    def _replace(match):
        key = match.group(1)
        if key not in paths:
            raise ValueError(f"Unknown path variable: ${{{key}}}")
        return str(paths[key])
    return re.sub(r"\$\{(\w+)\}", _replace, text)


# ── Font loading ───────────────────────────────────────────────────

_FONT_CACHE: dict[tuple[int, bool], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}


def load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a bold or regular face at the given size.

    Fonts are cached per (size, bold) since the layer renderer asks for
    the same two faces on every tick. Falls back to the regular list when
    no bold face is installed, then to Pillow's built-in font.
    """
    key = (size, bold)
    if key in _FONT_CACHE:
        return _FONT_CACHE[key]

    candidates = (BOLD_FONT_PATHS + FONT_PATHS) if bold else FONT_PATHS
    font = None
    for font_path in candidates:
        if font_path.exists():
            try:
                font = ImageFont.truetype(str(font_path), size=size, index=0)
                break
            except (OSError, IndexError):
                continue
    if font is None:
        # Last resort: Pillow default font (scalable on Pillow >= 10.1).
        font = ImageFont.load_default(size=size)

    _FONT_CACHE[key] = font
    return font


# ── Text rendering ─────────────────────────────────────────────────

def fit_text(
    draw: ImageDraw.ImageDraw,
    text: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    max_width: int | None,
) -> str:
    """Truncate *text* with an ellipsis until it fits within max_width px."""
    if not max_width:
        return text
    bbox = draw.textbbox((0, 0), text, font=font)
    while (bbox[2] - bbox[0]) > max_width and len(text) > 5:
        text = text[:-4] + "..."
        bbox = draw.textbbox((0, 0), text, font=font)
    return text


def draw_text_centered_v(
    img: Image.Image,
    text: str,
    x: float,
    center_y: float,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    color: tuple[int, int, int],
    max_width: int | None = None,
) -> int:
    """Draw left-aligned text whose ink box is vertically centred on center_y.

    Returns the rendered text width in pixels.
    """
    draw = ImageDraw.Draw(img)
    text = fit_text(draw, text, font, max_width)
    if not text:
        return 0

    bbox = draw.textbbox((0, 0), text, font=font)
    ty = center_y - (bbox[1] + bbox[3]) / 2
    draw.text((round(x), round(ty)), text, fill=color, font=font)
    return bbox[2] - bbox[0]
