"""Per-pass memoization of data file loads."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from .errors import ReadError
from .formats import detect_format, parse_data

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]


def read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


class LoadCache:
    """
    Maps a resolved path to the single task loading it.

    Every caller asking for the same path during a pass awaits the same task,
    so a data file is read and parsed at most once between two `reset()`
    calls. Tasks are created on the running loop; `load()` must be called
    from a coroutine.
    """

    def __init__(self, reader: Reader | None = None):
        self._reader = reader or read_text
        self._tasks: dict[str, asyncio.Task[Any]] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, path: object) -> bool:
        return path in self._tasks

    def paths(self) -> list[str]:
        return list(self._tasks)

    def reset(self) -> None:
        self._tasks.clear()

    def load(self, path: str) -> Awaitable[Any]:
        task = self._tasks.get(path)
        if task is None:
            logger.debug("Loading data file: %s", path)
            task = asyncio.ensure_future(self._load(path))
            self._tasks[path] = task
        else:
            logger.debug("Sharing load of data file: %s", path)
        return task

    async def _load(self, path: str) -> Any:
        detect_format(path)
        try:
            text = await asyncio.to_thread(self._reader, path)
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, str(exc)) from exc
        return parse_data(path, text)
