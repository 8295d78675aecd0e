"""Pages through Flickr place searches and yields each distinct photo once."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from .flickr_client import small_url
from ..utils.logging import get_configured_logger

logger = get_configured_logger("SearchFetcher")

PHOTOS_PER_PAGE = 250
START_PAGE = 1

# Flickr Small 320 dimensions
SMALL_WIDTH = 320
SMALL_HEIGHT = 240


@dataclass(frozen=True)
class PhotoRecord:
    title: str
    small_url: str
    width: int = SMALL_WIDTH
    height: int = SMALL_HEIGHT

    @classmethod
    def from_search_result(cls, photo: Dict[str, Any]) -> "PhotoRecord":
        return cls(title=photo.get("title") or "", small_url=small_url(photo))

    def to_document(self) -> Dict[str, str]:
        """Document body for the bulk index file."""
        return {
            "title": self.title,
            "smallUrl": self.small_url,
            "height": str(self.height),
            "width": str(self.width),
        }


@dataclass
class FetchStats:
    pages_fetched: int = 0
    unique: int = 0
    duplicates: int = 0
    total_pages: Optional[int] = None


def iter_unique_photos(
    client,
    place_id: str,
    per_page: int = PHOTOS_PER_PAGE,
    stats: Optional[FetchStats] = None,
) -> Iterator[PhotoRecord]:
    """
    Yield every distinct photo of a place search, page by page.

    The total page count reported by Flickr can shrink between calls, so
    paging stops at the lowest total seen so far. The last page is included.
    Photos whose small URL was already yielded in this call are skipped.

    API and transport errors propagate to the caller.
    """
    stats = stats if stats is not None else FetchStats()
    seen = set()
    page = START_PAGE
    total_pages = None

    while total_pages is None or page <= total_pages:
        logger.debug(f"Fetching page {page} for place {place_id}")
        result = client.search(place_id, per_page, page)
        stats.pages_fetched += 1

        if total_pages is None or result.pages < total_pages:
            total_pages = result.pages
            stats.total_pages = total_pages
            logger.info(f"Search for {place_id} contains {total_pages} pages")

        for photo in result.photos:
            record = PhotoRecord.from_search_result(photo)
            # Flickr returns the same photo on more than one page
            if record.small_url in seen:
                stats.duplicates += 1
                continue
            seen.add(record.small_url)
            stats.unique += 1
            yield record

        page += 1

    logger.info(f"Place {place_id}: {stats.unique} unique photos, {stats.duplicates} duplicates skipped")
