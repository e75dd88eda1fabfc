"""Glob selection of candidate documents."""

from __future__ import annotations

import re
from typing import Any

from pathspec.patterns import GitWildMatchPattern

DEFAULT_MATCH = "**/*"

# gitwildmatch lets a pattern also match everything below a matched directory
_DIRECTORY_SUFFIXES = ("(?:(?P<ps_d>/).*)?$", "(?:/.*)?$")


def _compile(line: str, flags: int) -> tuple[re.Pattern[str], bool]:
    regex, include = GitWildMatchPattern.pattern_to_regex(line)
    if regex is None:
        raise ValueError(f"Invalid match pattern: {line!r}")
    if line.rstrip("/").rsplit("/", 1)[-1] != "**":
        for suffix in _DIRECTORY_SUFFIXES:
            if regex.endswith(suffix):
                regex = regex[: -len(suffix)] + "$"
                break
    return re.compile(regex, flags), bool(include)


class DocumentMatcher:
    """
    Matches working-set keys against a single glob pattern.

    Patterns follow gitwildmatch syntax but only ever match a whole path, the
    way minimatch does. Options follow minimatch too: `dot` lets wildcards
    match segments starting with ".", `nocase` ignores case and `matchBase`
    lets a slash-free pattern match the basename at any depth. Without
    `matchBase` a slash-free pattern is anchored at the root.
    """

    def __init__(self, pattern: str = DEFAULT_MATCH, options: dict[str, Any] | None = None):
        options = options or {}
        self.pattern = pattern
        self.dot = bool(options.get("dot", False))
        self.nocase = bool(options.get("nocase", False))
        self.match_base = bool(options.get("matchBase", options.get("match_base", False)))

        line = pattern
        if "/" not in line and not self.match_base:
            line = "/" + line
        self._regex, self._include = _compile(line, re.IGNORECASE if self.nocase else 0)
        self._explicit_dot = line.startswith(".") or "/." in line

    def match(self, path: str, sep: str = "/") -> bool:
        if sep != "/":
            path = path.replace(sep, "/")
        if not self.dot and not self._explicit_dot:
            if any(part.startswith(".") for part in path.split("/")):
                return False
        return (self._regex.match(path) is not None) == self._include
