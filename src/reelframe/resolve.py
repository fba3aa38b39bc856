"""Video URL resolution — turn a share link into a playable video URL.

Best-effort by design of the upstream: the third-party downloader API has
no fixed response schema, so several candidate fields are probed in
order. Whatever goes wrong (no API key, network error, bad status,
non-JSON body, no usable field) the original reference comes back
unchanged, and callers never see an exception.
"""

import logging
import os
from urllib.parse import urlsplit

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_HOST = "instagram-downloader-download-instagram-videos-stories1.p.rapidapi.com"
DEFAULT_API_KEY_ENV = "RAPIDAPI_KEY"
DEFAULT_TIMEOUT = httpx.Timeout(15.0, connect=10.0)


def is_valid_reference(text: str) -> bool:
    """True for an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(text.strip())
    except (ValueError, AttributeError):
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def redact_url_for_logs(url: str) -> str:
    """Host part of a URL, safe to log."""
    try:
        parsed = urlsplit(url)
    except (ValueError, AttributeError):
        return "url"
    return parsed.hostname or parsed.netloc or "url"


def pick_video_url(data) -> str | None:
    """Probe an upstream payload for a video URL.

    Order: media[0].url, media[0].link, link, url. The first non-empty
    string wins.
    """
    if not isinstance(data, dict):
        return None

    candidates = []
    media = data.get("media")
    if isinstance(media, list) and media and isinstance(media[0], dict):
        candidates += [media[0].get("url"), media[0].get("link")]
    candidates += [data.get("link"), data.get("url")]

    for candidate in candidates:
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return None


def resolve_video_url(
    reference: str,
    api_key: str | None = None,
    client: httpx.Client | None = None,
    api_host: str = DEFAULT_API_HOST,
    api_key_env: str = DEFAULT_API_KEY_ENV,
    timeout: float | httpx.Timeout | None = None,
) -> dict:
    """Resolve *reference* to a playable video URL.

    Args:
        reference: Share link or direct video URL.
        api_key: Downloader API key. Defaults to the api_key_env variable.
        client: Optional httpx.Client (tests inject a MockTransport).
        api_host: Downloader API host.
        api_key_env: Environment variable holding the key.
        timeout: Request timeout; defaults to DEFAULT_TIMEOUT.

    Returns:
        {"video_url": str}. Never raises.
    """
    fallback = {"video_url": reference}

    key = api_key if api_key is not None else os.environ.get(api_key_env)
    if not key:
        logger.info("No downloader API key set; using reference as-is")
        return fallback

    owns_client = client is None
    if owns_client:
        client = httpx.Client()

    try:
        response = client.get(
            f"https://{api_host}/",
            params={"url": reference},
            headers={"x-rapidapi-key": key, "x-rapidapi-host": api_host},
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            follow_redirects=True,
        )
        response.raise_for_status()
        video_url = pick_video_url(response.json())
    except Exception as exc:
        logger.warning(
            "Resolving %s failed (%s); using reference as-is",
            redact_url_for_logs(reference), exc,
        )
        return fallback
    finally:
        if owns_client:
            client.close()

    if video_url is None:
        logger.warning("Upstream response had no video URL; using reference as-is")
        return fallback
    return {"video_url": video_url}
