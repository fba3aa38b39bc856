"""Style config loader.

Parses a YAML style file, converts hex colors to RGB tuples, validates
the canvas, and resolves ${path} variables in the output path.

Schema (every section optional):
  canvas:
    resolution: [720, 1280]       # must be 9:16
  style:
    title: "My Reel"
    background: "#0b0f14"
    accent: "#7c3aed"
  resolver:
    host: "<rapidapi host>"
    api_key_env: RAPIDAPI_KEY
    timeout: 15
  paths:
    out: "/tmp/reels"
  output: "${out}"                  # snapshot directory
"""

from pathlib import Path

import yaml

from .common import resolve_path_vars, to_rgb
from .geometry import DEFAULT_CANVAS_SIZE, CanvasTarget
from .layers import DEFAULT_ACCENT, DEFAULT_BACKGROUND, DEFAULT_TITLE, StyleConfig
from .resolve import DEFAULT_API_HOST, DEFAULT_API_KEY_ENV


VALID_TOP_LEVEL_KEYS = {"canvas", "style", "resolver", "paths", "output"}

CANVAS_ASPECT = (9, 16)


def default_config() -> dict:
    """Config dict equivalent to an empty style file."""
    return {
        "canvas": CanvasTarget(*DEFAULT_CANVAS_SIZE),
        "style": StyleConfig(DEFAULT_TITLE, DEFAULT_BACKGROUND, DEFAULT_ACCENT),
        "resolver": {
            "host": DEFAULT_API_HOST,
            "api_key_env": DEFAULT_API_KEY_ENV,
            "timeout": 15.0,
        },
        "output": ".",
    }


def load_config(config_path: str | Path) -> dict:
    """Load, validate, and normalize a style config file.

    Processing pipeline:
      1. Parse YAML (an empty file is an empty config).
      2. Build the CanvasTarget, checking for a positive 9:16 size.
      3. Parse style colors into a StyleConfig.
      4. Merge resolver settings over the defaults.
      5. Resolve ${path} variables in output.

    Returns:
        Dict with "canvas" (CanvasTarget), "style" (StyleConfig),
        "resolver" (dict) and "output" (str).

    Raises:
        ValueError: Unknown keys, bad colors, bad canvas, unknown path var.
        FileNotFoundError: Missing config file.
    """
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError("Config: top level must be a mapping")

    unknown = set(raw) - VALID_TOP_LEVEL_KEYS
    if unknown:
        raise ValueError(
            f"Config: unknown keys {sorted(unknown)}. "
            f"Valid: {sorted(VALID_TOP_LEVEL_KEYS)}"
        )

    config = default_config()

    canvas = raw.get("canvas") or {}
    if "resolution" in canvas:
        config["canvas"] = parse_canvas(canvas["resolution"])

    style = raw.get("style") or {}
    try:
        config["style"] = StyleConfig(
            title=str(style.get("title", DEFAULT_TITLE)),
            background_color=to_rgb(style.get("background", DEFAULT_BACKGROUND)),
            accent_color=to_rgb(style.get("accent", DEFAULT_ACCENT)),
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Config: invalid style: {exc}") from exc

    resolver = raw.get("resolver") or {}
    unknown = set(resolver) - set(config["resolver"])
    if unknown:
        raise ValueError(f"Config: unknown resolver keys {sorted(unknown)}")
    config["resolver"].update(resolver)
    config["resolver"]["timeout"] = float(config["resolver"]["timeout"])
    if config["resolver"]["timeout"] <= 0:
        raise ValueError("Config: resolver.timeout must be > 0")

    paths = raw.get("paths") or {}
    config["output"] = resolve_path_vars(str(raw.get("output", ".")), paths)

    return config


def parse_canvas(resolution) -> CanvasTarget:
    """Build a CanvasTarget from a [width, height] pair, enforcing 9:16."""
    try:
        w, h = (int(v) for v in resolution)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Config: canvas.resolution must be [width, height], got {resolution!r}") from exc

    if w <= 0 or h <= 0:
        raise ValueError(f"Config: canvas.resolution must be positive, got {w}x{h}")
    aw, ah = CANVAS_ASPECT
    if w * ah != h * aw:
        raise ValueError(f"Config: canvas.resolution must be {aw}:{ah}, got {w}x{h}")
    return CanvasTarget(w, h)
