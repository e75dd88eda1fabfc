from __future__ import annotations


class DataLoadError(RuntimeError):
    pass


class ReadError(DataLoadError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading data file {path}: {reason}")


class FormatError(DataLoadError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unknown data format: {path}")


class ParseError(DataLoadError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error parsing data file {path}: {reason}")


class ReferenceLoadError(DataLoadError):
    """A load failure tied to the reference and document that requested it."""

    def __init__(
        self,
        cause: DataLoadError,
        *,
        reference: str,
        path: str,
        source_path: str,
    ):
        self.cause = cause
        self.reference = reference
        self.path = path
        self.source_path = source_path
        super().__init__(
            f"Error loading {path} ({reference}) for {source_path}: {cause}"
        )

    @property
    def tolerable(self) -> bool:
        return not isinstance(self.cause, FormatError)
