"""Pruning traversal of a project tree yielding coverable Rust sources."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .logging import get_logger
from .path_filter import BUILD_OUTPUT_DIR, PathLike, is_coverable, is_source_file

_LOGGER = get_logger("source_walker")


def _skip_unreadable(error: OSError) -> None:
    _LOGGER.debug("Skipping unreadable entry %s: %s", error.filename, error.strerror)


def enumerate_source_files(root: PathLike) -> Iterator[Path]:
    """Yield every coverable ``.rs`` file under ``root`` exactly once.

    Directories failing :func:`is_coverable` are pruned before descent, so
    build output and cache trees are never listed. Each call walks the
    filesystem afresh.
    """
    root_path = Path(root)
    build_output = root_path / BUILD_OUTPUT_DIR
    if not is_coverable(root_path, root_path, build_output):
        return

    for dirpath, dirnames, filenames in os.walk(root_path, onerror=_skip_unreadable):
        current_dir = Path(dirpath)

        dirnames[:] = sorted(
            name
            for name in dirnames
            if is_coverable(current_dir / name, root_path, build_output)
        )

        for filename in sorted(filenames):
            path = current_dir / filename
            if not is_coverable(path, root_path, build_output):
                continue
            if not is_source_file(path):
                continue
            # Broken symlinks and special files are not regular files.
            if not path.is_file():
                continue
            yield path


__all__ = ["enumerate_source_files"]
