import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional

from ..exceptions import ConfigurationError

DEFAULT_BULK_ENDPOINT = "http://localhost:9200/_bulk"
DEFAULT_INDEX_NAME = "photos"
UPLOAD_MODES = ("script", "http")


class ConfigLoader:
    """Generic configuration loader for JSON config files."""

    @staticmethod
    def load_configs(
        config_path: str = "configs",
        config_files: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Load multiple JSON config files from a directory.

        Args:
            config_path: Path to config directory
            config_files: Dict mapping config keys to filenames
                          e.g., {"places": "places.json", "indexer": "indexer.json"}

        Returns:
            Dict with loaded configs. Missing files or invalid JSON → empty dicts.
        """
        config_dir = Path(config_path)
        result: Dict[str, Any] = {}

        config_files = config_files or {}

        for key, filename in config_files.items():
            file_path = config_dir / filename
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    result[key] = json.load(f)
            except (FileNotFoundError, json.JSONDecodeError):
                result[key] = {}

        return result

    @staticmethod
    def load_single_config(
        config_path: str = "configs",
        filename: Optional[str] = None
    ) -> Any:
        """Load a single JSON config file safely."""
        if not filename:
            return {}

        configs = ConfigLoader.load_configs(config_path, {"config": filename})
        return configs.get("config", {})


@dataclass
class Settings:
    """Runtime settings read from ``indexer.json``."""
    output_dir: str = "."
    index_name: str = DEFAULT_INDEX_NAME
    bulk_endpoint: str = DEFAULT_BULK_ENDPOINT
    max_workers: int = 4
    upload_mode: str = "script"
    request_timeout: float = 30.0
    script_name: str = "es-indexer.sh"

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "Settings":
        """
        Build settings from a loaded mapping, ignoring unknown keys.

        Raises:
            ConfigurationError: if a known key holds a value of the wrong type
                                or out of range
        """
        if not isinstance(data, dict):
            return cls()
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}

        for key in ("output_dir", "index_name", "bulk_endpoint", "upload_mode", "script_name"):
            if key in values and (not isinstance(values[key], str) or not values[key].strip()):
                raise ConfigurationError(f"indexer.json: {key} must be a non-empty string")

        if "max_workers" in values:
            workers = values["max_workers"]
            if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
                raise ConfigurationError(f"indexer.json: max_workers must be a positive integer, got {workers!r}")

        if "request_timeout" in values:
            timeout = values["request_timeout"]
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError(f"indexer.json: request_timeout must be a positive number, got {timeout!r}")
            values["request_timeout"] = float(timeout)

        if values.get("upload_mode", cls.upload_mode) not in UPLOAD_MODES:
            raise ConfigurationError(
                f"indexer.json: upload_mode must be one of {', '.join(UPLOAD_MODES)}, "
                f"got {values['upload_mode']!r}"
            )

        return cls(**values)

    @classmethod
    def load(cls, config_path: str = "configs") -> "Settings":
        return cls.from_mapping(ConfigLoader.load_single_config(config_path, "indexer.json"))
