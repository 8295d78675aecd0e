import pytest
import requests

from img_indexer.core.flickr_client import SearchPage


def make_photo(n, title=None):
    return {
        "id": str(n),
        "secret": f"s{n}",
        "server": "65535",
        "title": title if title is not None else f"Photo {n}",
        "url_n": f"https://live.staticflickr.com/65535/{n}_s{n}_n.jpg",
    }


class FakeFlickrClient:
    """
    Serves canned search pages.

    ``pages`` maps place id -> list of photo lists (page 1 first).
    ``reported_pages`` maps place id -> list of the total-pages value returned
    on each successive call; defaults to ``len(pages)``.
    """

    def __init__(self, pages, reported_pages=None, errors=None):
        self.pages = pages
        self.reported_pages = reported_pages or {}
        self.errors = errors or {}
        self.calls = []
        self.echo_calls = 0

    def echo(self, **params):
        self.echo_calls += 1
        return {"stat": "ok"}

    def search(self, place_id, per_page, page):
        self.calls.append((place_id, per_page, page))
        if place_id in self.errors:
            raise self.errors[place_id]
        place_pages = self.pages.get(place_id, [])
        reported = self.reported_pages.get(place_id)
        call_number = sum(1 for c in self.calls if c[0] == place_id) - 1
        if reported is None:
            total = len(place_pages)
        else:
            total = reported[min(call_number, len(reported) - 1)]
        photos = place_pages[page - 1] if page <= len(place_pages) else []
        return SearchPage(page=page, pages=total, photos=photos)


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload if payload is not None else {}
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []
        self.timeouts = []

    def _next(self):
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, params=None, timeout=None):
        self.requests.append(("GET", url, params))
        return self._next()

    def post(self, url, data=None, headers=None, timeout=None):
        body = data.read() if hasattr(data, "read") else data
        self.timeouts.append(timeout)
        self.requests.append(("POST", url, body, headers))
        return self._next()


@pytest.fixture
def photo():
    return make_photo
