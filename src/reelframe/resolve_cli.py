"""CLI for resolving a share link to a playable video URL.

Usage:
    reelframe resolve https://www.instagram.com/reel/abc/
    reelframe resolve https://www.instagram.com/reel/abc/ --config style.yaml
"""

import argparse
import sys

from .config import default_config, load_config
from .resolve import is_valid_reference, resolve_video_url


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Resolve a reel link to a direct video URL.",
    )
    parser.add_argument("reference", help="Share link or direct video URL")
    parser.add_argument(
        "--config", default=None,
        help="Path to YAML style config (resolver section is used)",
    )
    parsed = parser.parse_args(args)

    if not is_valid_reference(parsed.reference):
        print(f"Not an http(s) URL: {parsed.reference}", file=sys.stderr)
        sys.exit(1)

    config = load_config(parsed.config) if parsed.config else default_config()
    resolver = config["resolver"]
    result = resolve_video_url(
        parsed.reference.strip(),
        api_host=resolver["host"],
        api_key_env=resolver["api_key_env"],
        timeout=resolver["timeout"],
    )
    print(result["video_url"])


if __name__ == "__main__":
    main()
