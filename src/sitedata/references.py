from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, MutableMapping, MutableSequence, Union

Container = Union[MutableMapping[Any, Any], MutableSequence[Any]]


class FieldShape(enum.Enum):
    SCALAR = "scalar"
    LIST = "list"
    MAPPING = "mapping"
    NONE = "none"


@dataclass(frozen=True)
class ReferenceJob:
    """`container[key]` holds `reference` until the job writes its value."""

    source_path: str
    container: Container
    key: Any
    reference: str

    def write(self, value: Any) -> None:
        self.container[self.key] = value


def classify_field(value: Any) -> FieldShape:
    if isinstance(value, str):
        return FieldShape.SCALAR
    if isinstance(value, list):
        return FieldShape.LIST
    if isinstance(value, dict):
        return FieldShape.MAPPING
    return FieldShape.NONE


def enumerate_jobs(
    source_path: str, document: MutableMapping[str, Any], field: str
) -> list[ReferenceJob]:
    if not isinstance(document, MutableMapping):
        return []
    value = document.get(field)
    shape = classify_field(value)
    if shape is FieldShape.SCALAR:
        return [ReferenceJob(source_path, document, field, value)]
    if shape is FieldShape.LIST:
        return [
            ReferenceJob(source_path, value, index, item)
            for index, item in enumerate(value)
            if isinstance(item, str)
        ]
    if shape is FieldShape.MAPPING:
        return [
            ReferenceJob(source_path, value, key, item)
            for key, item in value.items()
            if isinstance(item, str)
        ]
    return []
