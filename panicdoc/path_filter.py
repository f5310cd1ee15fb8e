"""Predicates deciding which filesystem paths belong to the checked project.

All checks are lexical comparisons on path components; nothing here resolves
symlinks. The only side effects are one environment lookup
(``CARGO_HOME``) and the file-existence probe in :func:`is_part_of_project`.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

SOURCE_SUFFIX = ".rs"
BUILD_OUTPUT_DIR = "target"
CACHE_ENV_VAR = "CARGO_HOME"


def is_source_file(path: PathLike) -> bool:
    """Return True when the path carries the Rust source extension."""
    return PurePath(path).suffix == SOURCE_SUFFIX


def is_under(path: PathLike, ancestor: PathLike) -> bool:
    """Return True if ``path`` is ``ancestor`` or lives beneath it."""
    return PurePath(path).is_relative_to(PurePath(ancestor))


def is_hidden(path: PathLike, root: PathLike) -> bool:
    """Return True if any component below ``root`` starts with a dot."""
    candidate = PurePath(path)
    try:
        candidate = candidate.relative_to(PurePath(root))
    except ValueError:
        pass
    return any(part.startswith(".") for part in candidate.parts)


def is_external_cache(path: PathLike, root: PathLike) -> bool:
    """Return True if the path sits inside the directory named by ``CARGO_HOME``."""
    configured = os.environ.get(CACHE_ENV_VAR)
    if not configured:
        return False
    cache = PurePath(configured)
    if cache.is_absolute() and is_under(path, cache):
        return True
    return is_under(path, PurePath(root) / cache)


def is_part_of_project(path: PathLike, root: PathLike) -> bool:
    candidate = Path(path)
    root_path = Path(root)
    if candidate.is_absolute() and root_path.is_absolute():
        return is_under(candidate, root_path)
    if root_path.is_absolute():
        return (root_path / candidate).is_file()
    # Both relative: the relationship cannot be decided, keep the entry.
    return True


def is_coverable(path: PathLike, root: PathLike, build_output_dir: PathLike) -> bool:
    """Return True when the path survives every pruning rule."""
    ignorable = (
        is_under(path, build_output_dir)
        or is_hidden(path, root)
        or is_external_cache(path, root)
    )
    return not ignorable and is_part_of_project(path, root)


__all__ = [
    "BUILD_OUTPUT_DIR",
    "CACHE_ENV_VAR",
    "SOURCE_SUFFIX",
    "is_coverable",
    "is_external_cache",
    "is_hidden",
    "is_part_of_project",
    "is_source_file",
    "is_under",
]
