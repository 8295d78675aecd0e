import pytest

from img_indexer.core.search_fetcher import (
    FetchStats,
    PhotoRecord,
    iter_unique_photos,
    PHOTOS_PER_PAGE,
)
from img_indexer.exceptions import FlickrApiError

from conftest import FakeFlickrClient, make_photo


def test_duplicates_across_pages_are_written_once():
    pages = [
        [make_photo(1), make_photo(2), make_photo(3)],
        [make_photo(3), make_photo(4), make_photo(1)],
        [make_photo(5), make_photo(4)],
    ]
    client = FakeFlickrClient({"p1": pages})
    stats = FetchStats()

    records = list(iter_unique_photos(client, "p1", stats=stats))

    assert [r.title for r in records] == ["Photo 1", "Photo 2", "Photo 3", "Photo 4", "Photo 5"]
    assert len({r.small_url for r in records}) == 5
    assert stats.duplicates == 3
    assert stats.unique == 5


def test_last_page_is_fetched():
    pages = [[make_photo(1)], [make_photo(2)], [make_photo(3)]]
    client = FakeFlickrClient({"p1": pages})

    records = list(iter_unique_photos(client, "p1"))

    assert [c[2] for c in client.calls] == [1, 2, 3]
    assert records[-1].small_url == make_photo(3)["url_n"]


def test_uses_fixed_page_size_and_starts_at_page_one():
    client = FakeFlickrClient({"p1": [[make_photo(1)]]})
    list(iter_unique_photos(client, "p1"))
    assert client.calls == [("p1", PHOTOS_PER_PAGE, 1)]


def test_shrinking_page_total_stops_at_lowest_bound():
    pages = [[make_photo(n)] for n in range(1, 7)]
    # Flickr first claims 6 pages, then 4, then 5
    client = FakeFlickrClient({"p1": pages}, reported_pages={"p1": [6, 4, 5]})
    stats = FetchStats()

    records = list(iter_unique_photos(client, "p1", stats=stats))

    assert [c[2] for c in client.calls] == [1, 2, 3, 4]
    assert len(records) == 4
    assert stats.total_pages == 4


def test_zero_pages_ends_after_first_request():
    client = FakeFlickrClient({"p1": []})
    assert list(iter_unique_photos(client, "p1")) == []
    assert len(client.calls) == 1


def test_each_call_has_its_own_dedup_set():
    client = FakeFlickrClient({"p1": [[make_photo(1), make_photo(2)]]})
    first = list(iter_unique_photos(client, "p1"))
    second = list(iter_unique_photos(client, "p1"))
    assert first == second


def test_api_errors_propagate():
    client = FakeFlickrClient({}, errors={"p1": FlickrApiError(1, "Not found")})
    with pytest.raises(FlickrApiError):
        list(iter_unique_photos(client, "p1"))


def test_photo_record_document_shape():
    record = PhotoRecord.from_search_result(make_photo(7, title="Pier"))
    assert record.to_document() == {
        "title": "Pier",
        "smallUrl": "https://live.staticflickr.com/65535/7_s7_n.jpg",
        "height": "240",
        "width": "320",
    }
    assert list(record.to_document()) == ["title", "smallUrl", "height", "width"]


def test_photo_record_builds_url_without_url_n():
    photo = make_photo(8)
    del photo["url_n"]
    assert PhotoRecord.from_search_result(photo).small_url == (
        "https://live.staticflickr.com/65535/8_s8_n.jpg"
    )
