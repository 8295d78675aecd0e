"""Exception types and process exit codes."""

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_API_ERROR = 69     # EX_UNAVAILABLE
EXIT_CONFIG_ERROR = 78  # EX_CONFIG


class IndexerError(Exception):
    """Base class for img-indexer errors."""

    exit_code = 1


class ConfigurationError(IndexerError):
    """Credentials or settings could not be loaded. Fatal."""

    exit_code = EXIT_CONFIG_ERROR


class ApiConnectionError(IndexerError):
    """The Flickr connectivity check failed. Fatal."""

    exit_code = EXIT_API_ERROR


class FlickrApiError(IndexerError):
    """Flickr answered with ``stat: fail``."""

    def __init__(self, code, message: str):
        self.code = code
        self.message = message
        super().__init__(f"Flickr API error {code}: {message}")
