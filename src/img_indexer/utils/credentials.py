"""Flickr API credentials from a key-value properties file or the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, load_dotenv

from ..exceptions import ConfigurationError

API_KEY_PROPERTY = "flickr.apiKey"
SHARED_SECRET_PROPERTY = "flickr.sharedSecret"
API_KEY_ENV = "FLICKR_API_KEY"
SHARED_SECRET_ENV = "FLICKR_SHARED_SECRET"


@dataclass(frozen=True)
class FlickrCredentials:
    api_key: str
    shared_secret: str

    def __repr__(self) -> str:
        return f"FlickrCredentials(api_key='{self.api_key[:4]}…', shared_secret='***')"


class CredentialsManager:
    """
    Resolves Flickr credentials.

    Environment variables win over the properties file, so a deployment can
    keep secrets out of the working directory.
    """

    def __init__(self, properties_file: str = "flickr.properties", env_file: Optional[str] = None):
        self.properties_file = Path(properties_file)
        self.env_file = env_file

    def _read_properties(self) -> dict:
        if not self.properties_file.is_file():
            return {}
        return {k: v for k, v in dotenv_values(self.properties_file).items() if v}

    def get_flickr_credentials(self) -> FlickrCredentials:
        load_dotenv(self.env_file)
        properties = self._read_properties()

        api_key = os.getenv(API_KEY_ENV) or properties.get(API_KEY_PROPERTY)
        shared_secret = os.getenv(SHARED_SECRET_ENV) or properties.get(SHARED_SECRET_PROPERTY)

        if not api_key:
            raise ConfigurationError(
                f"Missing {API_KEY_PROPERTY} in {self.properties_file} (or {API_KEY_ENV})"
            )
        if not shared_secret:
            raise ConfigurationError(
                f"Missing {SHARED_SECRET_PROPERTY} in {self.properties_file} (or {SHARED_SECRET_ENV})"
            )
        return FlickrCredentials(api_key=api_key.strip(), shared_secret=shared_secret.strip())
