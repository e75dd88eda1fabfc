from __future__ import annotations

import json
from typing import Any

import yaml

from .errors import FormatError, ParseError

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def detect_format(path: str) -> str:
    """Return "json" or "yaml" from the literal suffix of `path`."""
    if path.endswith(JSON_SUFFIXES):
        return "json"
    if path.endswith(YAML_SUFFIXES):
        return "yaml"
    raise FormatError(path)


def parse_data(path: str, text: str) -> Any:
    fmt = detect_format(path)
    try:
        if fmt == "json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ParseError(path, str(exc)) from exc
