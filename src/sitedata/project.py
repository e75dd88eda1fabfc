"""Project context - the directories a pass resolves references against."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import ModuleType

DEFAULT_SOURCE = "src"


@dataclass(frozen=True)
class Project:
    """
    Directory layout of the site being built.

    `directory` is the project root; `source` (relative to it, or absolute) is
    the root of the document tree. `pathmod` is the path module used for every
    join and normalization, which lets callers resolve Windows-style document
    keys with `ntpath` on any host.
    """

    directory: str = field(default_factory=os.getcwd)
    source: str = DEFAULT_SOURCE
    pathmod: ModuleType = os.path

    @property
    def sep(self) -> str:
        return self.pathmod.sep

    def path(self, *parts: str) -> str:
        """Join `parts` onto the project directory and normalize the result."""
        return self.pathmod.normpath(self.pathmod.join(self.directory, *parts))

    def source_root(self) -> str:
        return self.path(self.source)
