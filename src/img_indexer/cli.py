"""
Command-line driver.

    img-indexer generate   fetch Flickr photos per place and write bulk index files
    img-indexer upload     upload the generated files to Elasticsearch
"""

import sys
from typing import List, Optional

import requests

from . import enable_verbose_logging
from .core.flickr_client import FlickrClient
from .core.generator import generate_bulk_index_files
from .core.places import load_places
from .core.uploader import bulk_upload_index_files, post_index_files
from .exceptions import (
    ApiConnectionError,
    ConfigurationError,
    FlickrApiError,
    IndexerError,
    EXIT_OK,
    EXIT_USAGE,
)
from .logging_config import configure_logging
from .utils.config_loader import Settings
from .utils.credentials import CredentialsManager
from .utils.logging import log_and_display, get_configured_logger

logger = get_configured_logger("AppDriver")

USAGE = "Usage: generate | upload"
COMMANDS = ("generate", "upload")
CONFIG_PATH = "configs"
PROPERTIES_FILE = "flickr.properties"


def usage() -> None:
    print(USAGE, file=sys.stderr)


def check_flickr_connection(client: FlickrClient) -> None:
    """
    Issue ``flickr.test.echo``.

    Raises:
        ApiConnectionError: if the call fails for any API or transport reason
    """
    logger.info("Testing Flickr connection")
    try:
        client.echo()
    except (FlickrApiError, requests.RequestException, ValueError) as e:
        logger.error(f"Flickr API error: {e}", exc_info=True)
        raise ApiConnectionError(f"Flickr API error: {e}") from e


def run_generate(config_path: str = CONFIG_PATH, properties_file: str = PROPERTIES_FILE) -> int:
    settings = Settings.load(config_path)
    places = load_places(config_path)
    credentials = CredentialsManager(properties_file).get_flickr_credentials()

    log_and_display("Connecting to Flickr", sticky=True)
    client = FlickrClient(
        credentials.api_key,
        credentials.shared_secret,
        timeout=settings.request_timeout,
    )
    check_flickr_connection(client)

    generate_bulk_index_files(
        client,
        places,
        output_dir=settings.output_dir,
        index_name=settings.index_name,
        max_workers=settings.max_workers,
    )
    return EXIT_OK


def run_upload(config_path: str = CONFIG_PATH) -> int:
    settings = Settings.load(config_path)
    places = load_places(config_path)

    if settings.upload_mode == "http":
        post_index_files(
            places,
            output_dir=settings.output_dir,
            endpoint=settings.bulk_endpoint,
            timeout=settings.request_timeout,
        )
    elif settings.upload_mode == "script":
        bulk_upload_index_files(
            places,
            output_dir=settings.output_dir,
            endpoint=settings.bulk_endpoint,
            script_name=settings.script_name,
        )
    else:
        raise ConfigurationError(f"Unknown upload_mode: {settings.upload_mode!r}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)

    if len(args) != 1:
        usage()
        return EXIT_USAGE

    command = args[0]
    if command not in COMMANDS:
        print("Unknown command", file=sys.stderr)
        usage()
        return EXIT_USAGE

    configure_logging()
    enable_verbose_logging()

    try:
        if command == "generate":
            return run_generate()
        return run_upload()
    except IndexerError as e:
        logger.critical(f"Fatal: {e}", exc_info=True)
        print(str(e), file=sys.stderr)
        return e.exit_code
