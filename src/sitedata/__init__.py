from typing import Any

from .cache import LoadCache
from .config import LoaderOptions, load_options
from .errors import (
    DataLoadError,
    FormatError,
    ParseError,
    ReadError,
    ReferenceLoadError,
)
from .loader import DataLoader, LoadResult, data_loader
from .project import Project


def load_data(
    files: dict[str, Any],
    *,
    directory: str | None = None,
    source: str = "src",
    data_property: str = "data",
    models: str = "models/",
    match: str = "**/*",
    match_options: dict[str, Any] | None = None,
    remove_source: bool = False,
    ignore_read_failure: bool = False,
) -> dict[str, Any]:
    """Resolve data references in `files` in place and return it."""
    import os

    options = LoaderOptions(
        data_property=data_property,
        directory=models,
        match=match,
        match_options=dict(match_options or {}),
        remove_source=remove_source,
        ignore_read_failure=ignore_read_failure,
    )
    project = Project(directory=directory or os.getcwd(), source=source)
    DataLoader(options).run(files, project)
    return files


__all__ = [
    "load_data",
    "data_loader",
    "load_options",
    "DataLoader",
    "LoadCache",
    "LoadResult",
    "LoaderOptions",
    "Project",
    "DataLoadError",
    "ReadError",
    "FormatError",
    "ParseError",
    "ReferenceLoadError",
]
