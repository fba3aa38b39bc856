"""CLI for exporting a single composited frame.

Opens a video, runs the composition loop headless for a few refreshes,
and writes the surface to frame.png.

Usage:
    # Local file, default style
    reelframe snapshot --source clip.mp4 --output /tmp/out

    # Style file plus overrides, frame at 2.5s
    reelframe snapshot --source clip.mp4 --config style.yaml \
        --title "Launch day" --accent "#e04c77" --at 2.5

    # Resolve a share link first (needs RAPIDAPI_KEY)
    reelframe snapshot --source https://www.instagram.com/reel/abc/ --resolve
"""

import argparse
from pathlib import Path

from .config import default_config, load_config
from .export import SNAPSHOT_FILENAME, save_snapshot
from .resolve import resolve_video_url
from .scheduler import ManualFrameScheduler
from .session import RenderSession
from .source import ClipSource


def snapshot(
    source,
    config: dict,
    output_dir: str | Path,
    frames: int = 1,
    filename: str = SNAPSHOT_FILENAME,
) -> Path:
    """Compose *frames* refreshes of *source* and save the final frame.

    Args:
        source: An unopened or opened ClipSource (anything with open()).
        config: Normalized config from load_config()/default_config().
        output_dir: Directory for the PNG.
        frames: Number of display refreshes to run (>= 1).
        filename: Output file name.

    Returns:
        Path of the written PNG.
    """
    if frames < 1:
        raise ValueError(f"frames must be >= 1, got {frames}")

    scheduler = ManualFrameScheduler()
    session = RenderSession(scheduler, style=config["style"], canvas=config["canvas"])
    session.attach(source)
    source.open()
    # The first refresh after readiness draws the first frame.
    scheduler.run(frames)
    session.stop()
    return save_snapshot(session.surface, output_dir, filename)


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Export one branded 9:16 frame from a video as PNG.",
    )
    parser.add_argument(
        "--source", required=True,
        help="Video path, direct video URL, or share link (with --resolve)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML style config",
    )
    parser.add_argument("--title", default=None, help="Title bar text")
    parser.add_argument("--background", default=None, help="Background color (#RRGGBB)")
    parser.add_argument("--accent", default=None, help="Badge color (#RRGGBB)")
    parser.add_argument(
        "--at", type=float, default=0.0,
        help="Playback time in seconds for the captured frame (default: 0)",
    )
    parser.add_argument(
        "--frames", type=int, default=1,
        help="Refreshes to run before capturing (default: 1)",
    )
    parser.add_argument(
        "--output", default=None,
        help="Output directory (default: config output, else current dir)",
    )
    parser.add_argument(
        "--resolve", action="store_true",
        help="Resolve --source through the downloader API first",
    )
    parsed = parser.parse_args(args)

    if parsed.frames < 1:
        parser.error("--frames must be >= 1")

    config = load_config(parsed.config) if parsed.config else default_config()
    try:
        config["style"].update(**{
            key: value for key, value in (
                ("title", parsed.title),
                ("background_color", parsed.background),
                ("accent_color", parsed.accent),
            ) if value is not None
        })
    except ValueError as exc:
        parser.error(str(exc))

    location = parsed.source
    if parsed.resolve:
        resolver = config["resolver"]
        location = resolve_video_url(
            location,
            api_host=resolver["host"],
            api_key_env=resolver["api_key_env"],
            timeout=resolver["timeout"],
        )["video_url"]
        print(f"Resolved: {location}")

    output_dir = parsed.output or config["output"]
    canvas = config["canvas"]
    at = parsed.at

    print(f"Composing {location}")
    print(f"  Canvas: {canvas.width}x{canvas.height}, t={at:.2f}s, {parsed.frames} refresh(es)")
    source = ClipSource(location, clock=lambda: at)
    try:
        out = snapshot(source, config, output_dir, frames=parsed.frames)
    finally:
        source.close()
    print(f"\nDone: {out}")


if __name__ == "__main__":
    main()
