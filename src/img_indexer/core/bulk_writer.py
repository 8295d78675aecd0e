"""Writes photo records as Elasticsearch bulk (NDJSON) index files."""

import json
from pathlib import Path
from typing import Iterable, Tuple, Union

from .places import Place
from .search_fetcher import PhotoRecord
from ..utils.config_loader import DEFAULT_INDEX_NAME
from ..utils.logging import get_configured_logger

logger = get_configured_logger("BulkFileWriter")


def index_action(index_name: str = DEFAULT_INDEX_NAME) -> str:
    """The index-action header line that precedes every document."""
    return json.dumps({"index": {"_index": index_name}}, separators=(",", ":"))


INDEX_ACTION = index_action()


def format_bulk_lines(record: PhotoRecord, index_name: str = DEFAULT_INDEX_NAME) -> Tuple[str, str]:
    """Return the (action, document) line pair for one record."""
    document = json.dumps(record.to_document(), ensure_ascii=False, separators=(",", ":"))
    return index_action(index_name), document


def write_bulk_file(
    place: Place,
    records: Iterable[PhotoRecord],
    output_dir: Union[str, Path] = ".",
    index_name: str = DEFAULT_INDEX_NAME,
) -> int:
    """
    Write ``records`` to ``<output_dir>/<place>_photos.json``.

    An existing file is overwritten. Records are consumed lazily, so an error
    raised by the iterable leaves a partial file behind.

    Returns:
        Number of records written
    """
    path = Path(output_dir) / place.index_filename
    path.parent.mkdir(parents=True, exist_ok=True)
    action = index_action(index_name)

    written = 0
    with open(path, "w", encoding="utf-8", newline="\n") as out:
        for record in records:
            _, document = format_bulk_lines(record, index_name)
            out.write(action + "\n")
            out.write(document + "\n")
            written += 1

    logger.info(f"Wrote {written} records to {path}")
    return written
