from __future__ import annotations

import logging
from typing import Any, MutableMapping

from .paths import is_model_reference, tree_key
from .project import Project

logger = logging.getLogger(__name__)


def maybe_prune(
    source_path: str,
    reference: str,
    files: MutableMapping[str, Any],
    enabled: bool,
    project: Project,
) -> str | None:
    """
    Remove the document `reference` points at from the working set.

    Model directory references are never pruned; they live outside the tree.
    Returns the removed key, or None when nothing was removed.
    """
    if not enabled or is_model_reference(reference):
        return None
    key = tree_key(source_path, reference, project)
    if key not in files:
        return None
    logger.debug("Removing source file: %s", key)
    del files[key]
    return key
