from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any

from .matching import DEFAULT_MATCH

DEFAULT_DATA_PROPERTY = "data"
DEFAULT_MODEL_DIRECTORY = "models/"

_OPTION_ALIASES = {
    "dataProperty": "data_property",
    "matchOptions": "match_options",
    "removeSource": "remove_source",
    "ignoreReadFailure": "ignore_read_failure",
}


@dataclass(frozen=True)
class LoaderOptions:
    data_property: str = DEFAULT_DATA_PROPERTY
    directory: str = DEFAULT_MODEL_DIRECTORY
    match: str = DEFAULT_MATCH
    match_options: dict[str, Any] = field(default_factory=dict)
    remove_source: bool = False
    ignore_read_failure: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "LoaderOptions":
        """Build options from plugin-style (camelCase) or snake_case keys."""
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Options must be a mapping")
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown option: {key}")
            if value is None:
                continue
            values[name] = value

        # falsy values fall back to defaults, as plugin options always have
        for name in ("data_property", "directory", "match"):
            if name in values and not values[name]:
                del values[name]
        if "match_options" in values and not isinstance(values["match_options"], dict):
            raise ValueError("'matchOptions' must be a mapping")
        for name in ("remove_source", "ignore_read_failure"):
            if name in values:
                values[name] = bool(values[name])
        return cls(**values)

    def merged(self, overrides: dict[str, Any]) -> "LoaderOptions":
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update(
            {_OPTION_ALIASES.get(k, k): v for k, v in overrides.items() if v is not None}
        )
        return LoaderOptions.from_dict(data)


def get_config_path(custom_path=None):
    if custom_path:
        return custom_path
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(xdg_config_home, "sitedata", "config.yaml")


def read_config(custom_path=None):
    import yaml

    config_path = get_config_path(custom_path)
    try:
        with open(config_path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except FileNotFoundError:
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a YAML mapping: {config_path}")
    return data


def load_options(custom_path=None, **overrides: Any) -> LoaderOptions:
    """Options from the config file, with non-None keyword overrides on top."""
    return LoaderOptions.from_dict(read_config(custom_path)).merged(overrides)
