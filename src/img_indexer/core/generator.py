"""Generate orchestrator: one bulk index file per place on a bounded worker pool."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

import requests

from .bulk_writer import write_bulk_file
from .places import Place
from .search_fetcher import FetchStats, iter_unique_photos, PHOTOS_PER_PAGE
from ..exceptions import FlickrApiError
from ..utils.config_loader import DEFAULT_INDEX_NAME
from ..utils.logging import log_and_display, log_manager, get_configured_logger

logger = get_configured_logger("Generator")


@dataclass
class IndexResult:
    """Outcome of indexing a single place."""
    place: Place
    path: Optional[Path] = None
    written: int = 0
    duplicates: int = 0
    pages_fetched: int = 0
    success: bool = False
    error_message: str = ""


def index_place(
    client,
    place: Place,
    output_dir: Union[str, Path] = ".",
    index_name: str = DEFAULT_INDEX_NAME,
    per_page: int = PHOTOS_PER_PAGE,
) -> IndexResult:
    """
    Fetch, deduplicate and write the bulk index file for one place.

    Never raises for API or I/O failures: they are logged and reported on the
    returned result, so sibling places keep running.
    """
    result = IndexResult(place=place, path=Path(output_dir) / place.index_filename)
    stats = FetchStats()
    logger.info(f"Building bulk index file for {place.name}...")

    try:
        photos = iter_unique_photos(client, place.place_id, per_page=per_page, stats=stats)
        result.written = write_bulk_file(place, photos, output_dir, index_name)
        result.success = True
        logger.info(f"Finished building bulk index file for {place.name}")
    except (FlickrApiError, requests.RequestException, OSError, ValueError,
            KeyError, TypeError, AttributeError) as e:
        # ValueError covers undecodable JSON bodies; the rest cover payloads a
        # custom client passes through without validation
        result.error_message = str(e)
        result.written = stats.unique
        logger.error(f"API processing error for {place.name}: {e}", exc_info=True)

    result.duplicates = stats.duplicates
    result.pages_fetched = stats.pages_fetched
    return result


def generate_bulk_index_files(
    client,
    places: Iterable[Place],
    output_dir: Union[str, Path] = ".",
    index_name: str = DEFAULT_INDEX_NAME,
    max_workers: int = 4,
    progress_bar: bool = True,
) -> List[IndexResult]:
    """
    Build bulk index files for every place and wait for all of them.

    Args:
        client: FlickrClient (or anything with a compatible ``search``)
        places: Places to index
        output_dir: Directory receiving the ``*_photos.json`` files
        index_name: Elasticsearch index named in the action lines
        max_workers: Upper bound on concurrent places
        progress_bar: Show a rich progress bar while waiting

    Returns:
        One IndexResult per place, in catalog order
    """
    places = list(places)
    if not places:
        log_and_display("No places to index", sticky=True, level="warning")
        return []

    workers = max(1, min(int(max_workers), len(places)))
    results = {}

    if progress_bar:
        log_manager.start_progress(total=len(places), description="Indexing places…")

    try:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="indexer") as pool:
            futures = {
                pool.submit(index_place, client, place, output_dir, index_name): i
                for i, place in enumerate(places)
            }
            for future in as_completed(futures):
                i = futures[future]
                results[i] = future.result()
                place = places[i]
                if progress_bar:
                    log_manager.update_progress(advance=1, description=f"Done: {place.name}")
    finally:
        if progress_bar:
            log_manager.stop_progress()

    ordered = [results[i] for i in range(len(places))]
    succeeded = sum(1 for r in ordered if r.success)
    log_and_display(
        f"✅ Indexed {succeeded}/{len(ordered)} places, "
        f"{sum(r.written for r in ordered)} photos written",
        sticky=True,
    )
    for failed in (r for r in ordered if not r.success):
        log_and_display(f"❌ {failed.place.name}: {failed.error_message}", sticky=True, level="warning")
    return ordered
