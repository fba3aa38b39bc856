"""Hand-off of a resolved video to an external design tool.

The host may or may not embed a design-tool app. detect_design_tool()
checks once and returns either a HostDesignTool wrapping the host app or
a NullDesignTool, so callers always talk to the same port.

Insertion is best-effort: failures are logged, never raised.
"""

import logging

logger = logging.getLogger(__name__)

VIDEO_MIME_TYPE = "video/mp4"
DEFAULT_MEDIA_NAME = "Reel"

_REQUIRED_APP_METHODS = ("on_ready", "add_media", "close")


class DesignToolPort:
    """Interface for inserting a video into a design tool."""

    available = False

    async def insert_video(self, video_url: str, title: str = "") -> bool:
        raise NotImplementedError


class NullDesignTool(DesignToolPort):
    """Used when the host has no design-tool capability."""

    async def insert_video(self, video_url: str, title: str = "") -> bool:
        return False


class HostDesignTool(DesignToolPort):
    """Talks to a host app exposing async on_ready(), add_media(), close()."""

    available = True

    def __init__(self, app):
        self.app = app

    async def insert_video(self, video_url: str, title: str = "") -> bool:
        """Submit the video to the host app, then ask it to close.

        Returns:
            True if the whole sequence completed, False if skipped or failed.
        """
        if not video_url:
            return False

        media = {
            "type": "video",
            "src": video_url,
            "mimeType": VIDEO_MIME_TYPE,
            "name": title or DEFAULT_MEDIA_NAME,
        }
        try:
            await self.app.on_ready()
            await self.app.add_media(media)
            await self.app.close()
        except Exception:
            logger.exception("Design tool insert failed for %s", media["name"])
            return False
        return True


def detect_design_tool(host) -> DesignToolPort:
    """Return a port for *host*'s design-tool app, or a no-op port."""
    app = getattr(host, "app", None) if host is not None else None
    if app is not None and all(callable(getattr(app, m, None)) for m in _REQUIRED_APP_METHODS):
        return HostDesignTool(app)
    return NullDesignTool()
