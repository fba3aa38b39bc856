"""Subcommand dispatcher for reelframe.

Usage:
    reelframe snapshot --source clip.mp4 --output out/
    reelframe resolve  https://www.instagram.com/reel/abc/
    reelframe insert   https://cdn.example.com/reel.mp4 --host mytool.bridge:host
"""

import argparse
import logging
import sys


def main(args=None):
    parser = argparse.ArgumentParser(
        prog="reelframe",
        description="Compose videos into a branded 9:16 frame and export snapshots.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log debug output from the compositor",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands. Each delegates to its own module's main().
    subparsers.add_parser("snapshot", help="Export one composited frame as PNG")
    subparsers.add_parser("resolve", help="Resolve a share link to a video URL")
    subparsers.add_parser("insert", help="Insert a video into the host design tool")

    # Parse only the subcommand name, pass the rest to the subcommand's parser.
    parsed, remaining = parser.parse_known_args(args)

    if parsed.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if parsed.command == "snapshot":
        from .snapshot_cli import main as snapshot_main
        snapshot_main(remaining)
    elif parsed.command == "resolve":
        from .resolve_cli import main as resolve_main
        resolve_main(remaining)
    elif parsed.command == "insert":
        from .insert_cli import main as insert_main
        insert_main(remaining)


if __name__ == "__main__":
    main()
