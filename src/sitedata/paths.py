"""
Reference addressing.

    model.json          -> relative to the referencing document
    ./model.json        -> relative to the referencing document
    dir/model.yaml      -> relative to the referencing document
    ../model.json       -> relative to the referencing document
    /model.yaml         -> from the root of the source tree
    /dir/model.json     -> from the root of the source tree
    !model.yaml         -> from the model directory (outside the source tree)
    !dir/model.json     -> from the model directory (outside the source tree)
"""

from __future__ import annotations

from .project import Project

MODEL_PREFIX = "!"
ROOT_PREFIX = "/"


def is_model_reference(reference: str) -> bool:
    return reference.startswith(MODEL_PREFIX)


def is_root_reference(reference: str) -> bool:
    return reference.startswith(ROOT_PREFIX)


def resolve_reference(
    source_path: str, reference: str, model_dir: str, project: Project
) -> str:
    if is_model_reference(reference):
        return project.path(model_dir, reference[1:])
    if is_root_reference(reference):
        return project.path(project.source_root(), reference[1:])
    return project.path(project.source_root(), source_path, "..", reference)


def tree_key(source_path: str, reference: str, project: Project) -> str:
    """Key of the referenced document inside the working set."""
    pathmod = project.pathmod
    sep = pathmod.sep
    if is_root_reference(reference):
        joined = pathmod.join(sep, reference[1:])
    else:
        joined = pathmod.join(sep, source_path, "..", reference)
    _, resolved = pathmod.splitdrive(pathmod.normpath(joined))
    return resolved.lstrip(sep + (pathmod.altsep or ""))
