"""CLI for handing a video to an embedding design tool.

The host is named as module:attribute and must expose an ``app`` with
async on_ready(), add_media() and close(). Without a host (or with one
lacking that app) the insert is skipped.

Usage:
    reelframe insert https://cdn.example.com/reel.mp4 --title "Launch day"
    reelframe insert https://www.instagram.com/reel/abc/ --resolve \
        --host mytool.bridge:host
"""

import argparse
import asyncio
import importlib
import sys

from .config import default_config, load_config
from .design_tool import detect_design_tool
from .resolve import is_valid_reference, resolve_video_url


def load_host(spec: str):
    """Import 'package.module:attr' and return the attribute."""
    module_name, _, attr = spec.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Host must be 'module:attribute', got '{spec}'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr}'") from None


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Insert a video into the host's design tool.",
    )
    parser.add_argument("reference", help="Direct video URL, or share link (with --resolve)")
    parser.add_argument("--title", default=None, help="Media name (default: config title)")
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML style config",
    )
    parser.add_argument(
        "--resolve", action="store_true",
        help="Resolve the reference through the downloader API first",
    )
    parser.add_argument(
        "--host", default=None,
        help="Design-tool host as module:attribute",
    )
    parsed = parser.parse_args(args)

    if not is_valid_reference(parsed.reference):
        print(f"Not an http(s) URL: {parsed.reference}", file=sys.stderr)
        sys.exit(1)

    host = None
    if parsed.host:
        try:
            host = load_host(parsed.host)
        except (ImportError, ValueError) as exc:
            parser.error(str(exc))

    config = load_config(parsed.config) if parsed.config else default_config()
    title = parsed.title if parsed.title is not None else config["style"].title

    url = parsed.reference.strip()
    if parsed.resolve:
        resolver = config["resolver"]
        url = resolve_video_url(
            url,
            api_host=resolver["host"],
            api_key_env=resolver["api_key_env"],
            timeout=resolver["timeout"],
        )["video_url"]
        print(f"Resolved: {url}")

    port = detect_design_tool(host)
    if not port.available:
        print("No design tool available; skipped insert")
        return

    if asyncio.run(port.insert_video(url, title)):
        print(f"Inserted '{title}' into design tool")
    else:
        print("Design tool insert failed", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
