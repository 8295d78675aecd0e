"""
img-indexer - Builds Elasticsearch bulk index files from Flickr place searches.
"""

import logging
from logging import NullHandler

# --- PACKAGE-LEVEL LOGGING CONFIG ---
VERBOSE_LOGGING = False


_CONFIGURED_LOGGERS = []


def enable_verbose_logging():
    global VERBOSE_LOGGING
    VERBOSE_LOGGING = True
    # Reconfigure all previously configured loggers
    for name in _CONFIGURED_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(logging.INFO)


# --- RE-EXPORT (for explicit imports) ---
# You can still do: from img_indexer import generate_bulk_index_files, Place

from .utils.logging import log_and_display
from .exceptions import IndexerError, ConfigurationError, ApiConnectionError, FlickrApiError
from .core.places import Place, DEFAULT_PLACES, load_places
from .core.flickr_client import FlickrClient
from .core.search_fetcher import iter_unique_photos, PhotoRecord
from .core.bulk_writer import write_bulk_file
from .core.generator import generate_bulk_index_files, IndexResult
from .core.uploader import bulk_upload_index_files, post_index_files

# --- METADATA ---
__version__ = "0.1.0"

# --- PREVENT "No handler found" WARNINGS ---
logging.getLogger(__name__).addHandler(NullHandler())

# --- PUBLIC API ---
__all__ = [
    "enable_verbose_logging",
    "log_and_display",
    "IndexerError",
    "ConfigurationError",
    "ApiConnectionError",
    "FlickrApiError",
    "Place",
    "DEFAULT_PLACES",
    "load_places",
    "FlickrClient",
    "iter_unique_photos",
    "PhotoRecord",
    "write_bulk_file",
    "generate_bulk_index_files",
    "IndexResult",
    "bulk_upload_index_files",
    "post_index_files",
]
