#!/usr/bin/env python3
"""Generate synthetic source videos for trying out reelframe snapshots.

Creates three clips in examples/demo-clips/ with different aspect ratios
(landscape, square, tall) so letterboxing on both axes is easy to see.
Each clip is a solid color with its size written in the middle.

Usage:
    python examples/generate_demo_clips.py
    # Then export a frame:
    reelframe snapshot --source examples/demo-clips/landscape.mp4 \
        --config examples/style.yaml --output examples/demo-renders/
"""

import numpy as np
from moviepy import ImageClip
from pathlib import Path
from PIL import Image, ImageDraw, ImageFont

OUTPUT_DIR = Path(__file__).resolve().parent / "demo-clips"
FPS = 30

CLIPS = [
    ("landscape", (640, 360), (60, 60, 180),  2.0),  # blue, 16:9
    ("square",    (480, 480), (60, 160, 60),  2.0),  # green, 1:1
    ("tall",      (270, 630), (200, 130, 40), 2.0),  # orange, 9:21
]


def _make_frame(size: tuple[int, int], color: tuple[int, int, int]) -> np.ndarray:
    """Solid color frame with 'W x H' centred in white."""
    img = Image.new("RGB", size, color)
    draw = ImageDraw.Draw(img)
    label = f"{size[0]} x {size[1]}"
    try:
        font = ImageFont.truetype(
            "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 36
        )
    except OSError:
        font = ImageFont.load_default()
    bbox = draw.textbbox((0, 0), label, font=font)
    tw, th = bbox[2] - bbox[0], bbox[3] - bbox[1]
    draw.text(((size[0] - tw) / 2, (size[1] - th) / 2), label, fill=(255, 255, 255), font=font)
    return np.array(img)


def main():
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    for name, size, color, duration in CLIPS:
        out = OUTPUT_DIR / f"{name}.mp4"
        if out.exists():
            print(f"  skip {name} (exists)")
            continue

        clip = ImageClip(_make_frame(size, color), duration=duration)
        clip.write_videofile(str(out), fps=FPS, logger=None)
        print(f"  wrote {name} {size[0]}x{size[1]} ({duration}s)")

    print(f"\nDone. {len(CLIPS)} clips in {OUTPUT_DIR}")


if __name__ == "__main__":
    main()
