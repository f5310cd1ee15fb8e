"""Configuration loading for panicdoc (.panicdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".panicdoc.yml"
DEFAULT_SKIP_DIRS = ("tests", "examples")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CheckerConfig:
    """Represents the settings for one panicdoc run."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    skip_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    include_comments: bool = False
    jobs: int = 1


def resolve_root(path: Optional[Path] = None, manifest_path: Optional[Path] = None) -> Path:
    """Return the canonical project root.

    ``manifest_path`` names a ``Cargo.toml`` (or the directory holding it) and
    takes precedence over ``path``; without either, the working directory is
    used.
    """
    if manifest_path is not None:
        manifest = manifest_path.expanduser()
        if not manifest.exists():
            raise FileNotFoundError(f"Manifest path not found: {manifest_path}")
        manifest = manifest.resolve()
        return manifest if manifest.is_dir() else manifest.parent

    root = (path or Path.cwd()).expanduser()
    if not root.exists():
        raise FileNotFoundError(f"Project path not found: {root}")
    root = root.resolve()
    if not root.is_dir():
        raise NotADirectoryError(f"Project path is not a directory: {root}")
    return root


def load_config(root: Path) -> CheckerConfig:
    """Load ``.panicdoc.yml`` from ``root``, falling back to defaults."""
    config_file = root / CONFIG_FILENAME
    if not config_file.exists():
        return CheckerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = CheckerConfig(root=root)
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))
    if "skip_dirs" in data:
        config.skip_dirs = _as_str_list(data.get("skip_dirs"))
    include_comments = _as_bool(data.get("include_comments"))
    if include_comments is not None:
        config.include_comments = include_comments
    jobs = _as_int(data.get("jobs"))
    if jobs is not None:
        if jobs < 1:
            raise ConfigError("jobs must be a positive integer")
        config.jobs = jobs
    return config


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CheckerConfig",
    "ConfigError",
    "DEFAULT_SKIP_DIRS",
    "load_config",
    "resolve_root",
]
