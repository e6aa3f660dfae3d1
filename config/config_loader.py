"""Loading of map lists and generator options from YAML/JSON files."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

import yaml

from modules.arena.errors import ConfigurationError
from modules.arena.gen.params import MapConfig


logger = logging.getLogger(__name__)

_MISSING = object()


class ConfigLoader:
    def __init__(self, config_file: str | os.PathLike[str] = "config/maps.yaml"):
        self.path = os.fspath(config_file)
        self.config: Dict[str, Any] = {}
        if os.path.exists(self.path):
            with open(self.path, "r", encoding="utf-8") as f:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as exc:
                    raise ConfigurationError(f"cannot parse '{self.path}': {exc}") from exc
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigurationError(f"'{self.path}' must contain a mapping at the top level")
            self.config = data
        else:
            logger.warning("Configuration file '%s' not found; using empty configuration", self.path)

    def get(self, *keys, default=_MISSING):
        """
        Fetch a nested value from the configuration.
        When a key path does not exist:
          - raises KeyError if no default is given
          - returns the default otherwise
        """
        ref = self.config
        for key in keys:
            if isinstance(ref, dict) and key in ref:
                ref = ref[key]
            else:
                if default is not _MISSING:
                    return default
                raise KeyError(f"Configuration key {' -> '.join(map(str, keys))} not found and no default provided.")
        return ref


def load_map_configs(path: str | os.PathLike[str]) -> List[MapConfig]:
    """Return the ``maps`` list of ``path`` as :class:`MapConfig` objects."""

    loader = ConfigLoader(path)
    entries = loader.get("maps", default=[])
    if not isinstance(entries, list):
        raise ConfigurationError("'maps' must be a list of map entries")
    configs: List[MapConfig] = []
    for position, entry in enumerate(entries):
        try:
            configs.append(MapConfig.from_mapping(entry))
        except ConfigurationError as exc:
            raise ConfigurationError(f"map entry {position} in '{loader.path}': {exc}") from exc
    return configs


def load_generator_options(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """Return the optional ``generator`` section with defaults filled in."""

    loader = ConfigLoader(path)
    return {
        "tile_size": float(loader.get("generator", "tile_size", default=1.0)),
        "attempt_budget_mode": bool(loader.get("generator", "attempt_budget_mode", default=False)),
    }


__all__ = ["ConfigLoader", "load_generator_options", "load_map_configs"]
