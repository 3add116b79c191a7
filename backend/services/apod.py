"""NASA APOD (Astronomy Picture of the Day) client.

Fetches the day's media item, normalizes it into the gateway's response
shape, and caches the result per requested date.
"""

import json
import logging
from urllib.parse import urlsplit

import httpx

from errors import UpstreamParseError, UpstreamRejectedError, UpstreamUnavailableError
from services.cache import TTLCache

logger = logging.getLogger(__name__)

SOURCE_TAG = "nasa-apod"
TODAY_KEY = "today"

# First day APOD has content for; upstream rejects earlier dates with a 400.
APOD_FIRST_DATE = "1995-06-16"


def _is_animated(url: str | None) -> bool:
    if not url:
        return False
    return urlsplit(url).path.lower().endswith(".gif")


def normalize(data: dict) -> dict:
    """Map an upstream APOD payload onto the gateway's response shape."""
    media_type = data.get("media_type") or "image"

    result = {
        "date": data.get("date"),
        "title": data.get("title"),
        "explanation": data.get("explanation"),
        "mediaType": media_type,
        "copyright": data.get("copyright") or None,
        "source": SOURCE_TAG,
    }

    if media_type == "image":
        url = data.get("url")
        hdurl = data.get("hdurl")
        result["imageUrl"] = url
        if _is_animated(hdurl):
            # Keep the HD field a still image; the GIF is exposed separately.
            result["hdImageUrl"] = url
            result["gifUrl"] = hdurl
        else:
            result["hdImageUrl"] = hdurl or url
    else:
        result["mediaUrl"] = data.get("url")

    return result


def _error_payload(text: str):
    try:
        return json.loads(text)
    except ValueError:
        return text[:200] or None


class ApodService:
    """Cached fetch-and-normalize access to the APOD upstream."""

    def __init__(
        self,
        api_key: str,
        cache: TTLCache,
        base_url: str = "https://api.nasa.gov/planetary/apod",
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.cache = cache
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, date: str | None = None) -> dict:
        """Return the normalized APOD for ``date`` (YYYY-MM-DD) or for today.

        Raises an UpstreamError subclass when the upstream call fails.
        """
        key = date or TODAY_KEY
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("APOD cache hit for %s", key)
            return dict(cached)

        params = {"api_key": self.api_key}
        if date:
            params["date"] = date

        logger.info("Fetching APOD from upstream (date=%s)", date or TODAY_KEY)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(f"APOD upstream unreachable: {e}") from e

        text = resp.text
        if not resp.is_success:
            raise UpstreamRejectedError(
                f"APOD upstream error: {resp.status_code} {text[:200]}",
                upstream_status=resp.status_code,
                payload=_error_payload(text),
            )

        try:
            data = json.loads(text)
        except ValueError as e:
            raise UpstreamParseError(
                "APOD upstream returned invalid JSON", upstream_status=resp.status_code
            ) from e
        if not isinstance(data, dict):
            raise UpstreamParseError(
                f"APOD upstream returned {type(data).__name__}, expected an object",
                upstream_status=resp.status_code,
            )

        result = normalize(data)
        self.cache.set(key, result)
        return dict(result)
