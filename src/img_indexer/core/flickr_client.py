"""Minimal Flickr REST client: photo search and the echo test call."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..exceptions import FlickrApiError
from ..utils.logging import get_configured_logger

logger = get_configured_logger("FlickrClient")

REST_ENDPOINT = "https://api.flickr.com/services/rest/"
SMALL_320_URL = "https://live.staticflickr.com/{server}/{id}_{secret}_n.jpg"


@dataclass
class SearchPage:
    """One page of ``flickr.photos.search`` results."""
    page: int
    pages: int
    photos: List[Dict[str, Any]] = field(default_factory=list)


def small_url(photo: Dict[str, Any]) -> str:
    """Small 320 URL for a search result, built from its parts if ``url_n`` is absent."""
    if not isinstance(photo, dict):
        raise FlickrApiError(None, f"Malformed search result: {photo!r}")
    if photo.get("url_n"):
        return photo["url_n"]
    missing = [key for key in ("server", "id", "secret") if not photo.get(key)]
    if missing:
        raise FlickrApiError(
            None, f"Search result {photo.get('id')!r} has no url_n and lacks {', '.join(missing)}"
        )
    return SMALL_320_URL.format(server=photo["server"], id=photo["id"], secret=photo["secret"])


class FlickrClient:
    """
    Unsigned Flickr REST calls over a ``requests.Session``.

    The shared secret is kept for signed methods; none of the calls used
    here require a signature.
    """

    def __init__(
        self,
        api_key: str,
        shared_secret: str,
        session: Optional[requests.Session] = None,
        base_url: str = REST_ENDPOINT,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.shared_secret = shared_secret
        self.session = session or requests.Session()
        self.base_url = base_url
        self.timeout = timeout

    def call(self, method: str, **params) -> Dict[str, Any]:
        """
        Invoke a REST method and return the decoded JSON payload.

        Raises:
            FlickrApiError: if Flickr reports ``stat: fail``
            requests.RequestException: on transport or HTTP errors
        """
        query = {
            "method": method,
            "api_key": self.api_key,
            "format": "json",
            "nojsoncallback": 1,
        }
        query.update(params)

        response = self.session.get(self.base_url, params=query, timeout=self.timeout)
        response.raise_for_status()
        payload = response.json()

        if not isinstance(payload, dict):
            raise FlickrApiError(None, f"Unexpected response body for {method}")
        if payload.get("stat") != "ok":
            raise FlickrApiError(payload.get("code"), payload.get("message", "unknown error"))
        return payload

    def echo(self, **params) -> Dict[str, Any]:
        """``flickr.test.echo`` - used as a no-op connectivity check."""
        return self.call("flickr.test.echo", **params)

    def search(self, place_id: str, per_page: int, page: int) -> SearchPage:
        payload = self.call(
            "flickr.photos.search",
            place_id=place_id,
            per_page=per_page,
            page=page,
            extras="url_n",
        )
        photos = payload.get("photos")
        if not isinstance(photos, dict) or not isinstance(photos.get("photo", []), list):
            raise FlickrApiError(None, f"Malformed search response for place {place_id}")
        try:
            return SearchPage(
                page=int(photos.get("page", page)),
                pages=int(photos.get("pages", 0)),
                photos=list(photos.get("photo", [])),
            )
        except (TypeError, ValueError) as e:
            raise FlickrApiError(None, f"Malformed page counts for place {place_id}: {e}") from e
