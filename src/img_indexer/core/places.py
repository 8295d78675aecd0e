"""Place catalog: the named regions searched on Flickr."""

from dataclasses import dataclass
from typing import List, Optional

from ..exceptions import ConfigurationError
from ..utils.config_loader import ConfigLoader
from ..utils.logging import get_configured_logger

logger = get_configured_logger("PlaceCatalog")

INDEX_FILE_SUFFIX = "_photos.json"


@dataclass(frozen=True)
class Place:
    """A named region and its Flickr place id."""
    name: str
    place_id: str

    @property
    def index_filename(self) -> str:
        """Bulk index file name, e.g. ``San Francisco_photos.json``."""
        return f"{self.name.strip()}{INDEX_FILE_SUFFIX}"


DEFAULT_PLACES = (
    Place("Seattle", "uiZgkRVTVrMaF2cP"),
    Place("San Francisco", "7.MJR8tTVrIO1EgB"),
    Place("Portland", "Oc0MVktTVr1JQ7P5"),
    Place("Los Angeles", "7Z5HMmpTVr4VzDpD"),
    Place("Chicago", "prbd60NTUb2haaDH"),
    Place("New York", "ODHTuIhTUb75gdBu"),
    Place("London", "hP_s5s9VVr5Qcg"),
    Place("Paris", "EsIQUYZXU79_kEA"),
    Place("Shanghai", "JAJiM7JTU78IjzqC"),
    Place("Florence", "ZPDshblWU7_DgSs"),
    Place("Rome", "uijRnjBWULsQTwc"),
    Place("Hong Kong", "4Jji9AVTVrLRrBR9Zg"),
    Place("Barcelona", "p.gvf6dWV7k1Gpg"),
)


def _parse_place(entry, position: int) -> Place:
    if not isinstance(entry, dict):
        raise ConfigurationError(f"places.json entry {position} is not an object: {entry!r}")
    name = entry.get("name")
    place_id = entry.get("id")
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"places.json entry {position} has no name")
    if not isinstance(place_id, str) or not place_id.strip():
        raise ConfigurationError(f"places.json entry {position} ({name}) has no id")
    return Place(name=name, place_id=place_id.strip())


def load_places(config_path: Optional[str] = "configs") -> List[Place]:
    """
    Load the place catalog from ``<config_path>/places.json``.

    The file holds a JSON list of ``{"name": ..., "id": ...}`` objects.
    A missing or empty file yields the built-in ``DEFAULT_PLACES``.

    Raises:
        ConfigurationError: if the file contains malformed entries
    """
    if config_path is None:
        return list(DEFAULT_PLACES)

    entries = ConfigLoader.load_single_config(config_path, "places.json")
    if not entries:
        logger.info("No places.json found, using the default catalog")
        return list(DEFAULT_PLACES)
    if not isinstance(entries, list):
        raise ConfigurationError("places.json must contain a list of places")

    places = [_parse_place(entry, i) for i, entry in enumerate(entries)]
    logger.info(f"Loaded {len(places)} places from {config_path}")
    return places
