import pytest
import requests

from img_indexer.core.flickr_client import FlickrClient, REST_ENDPOINT, small_url
from img_indexer.exceptions import FlickrApiError

from conftest import FakeResponse, FakeSession


def test_search_parses_page_and_sends_parameters():
    session = FakeSession([FakeResponse({
        "stat": "ok",
        "photos": {"page": 2, "pages": 7, "perpage": 250, "photo": [{"id": "1"}]},
    })])
    client = FlickrClient("key", "secret", session=session)

    page = client.search("uiZgkRVTVrMaF2cP", 250, 2)

    assert (page.page, page.pages, page.photos) == (2, 7, [{"id": "1"}])
    _, url, params = session.requests[0]
    assert url == REST_ENDPOINT
    assert params["method"] == "flickr.photos.search"
    assert params["api_key"] == "key"
    assert params["place_id"] == "uiZgkRVTVrMaF2cP"
    assert (params["per_page"], params["page"]) == (250, 2)
    assert params["nojsoncallback"] == 1


def test_failed_stat_raises_api_error():
    session = FakeSession([FakeResponse({"stat": "fail", "code": 100, "message": "Invalid API Key"})])
    client = FlickrClient("bad", "secret", session=session)

    with pytest.raises(FlickrApiError) as exc_info:
        client.echo()

    assert exc_info.value.code == 100
    assert "Invalid API Key" in str(exc_info.value)


def test_http_error_propagates():
    client = FlickrClient("key", "secret", session=FakeSession([FakeResponse(status_code=503)]))
    with pytest.raises(requests.HTTPError):
        client.echo()


def test_echo_uses_test_method():
    session = FakeSession([FakeResponse({"stat": "ok"})])
    FlickrClient("key", "secret", session=session).echo()
    assert session.requests[0][2]["method"] == "flickr.test.echo"


def test_null_photos_block_is_an_api_error():
    session = FakeSession([FakeResponse({"stat": "ok", "photos": None})])
    client = FlickrClient("key", "secret", session=session)
    with pytest.raises(FlickrApiError, match="Malformed search response"):
        client.search("sea", 250, 1)


def test_small_url_needs_url_n_or_its_parts():
    with pytest.raises(FlickrApiError, match="server"):
        small_url({"id": "9", "title": "no url"})
    assert small_url({"id": "9", "server": "1", "secret": "x"}) == "https://live.staticflickr.com/1/9_x_n.jpg"
