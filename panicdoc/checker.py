"""Project-level driver: enumerate sources, apply exclusions, collect findings."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .analyzers import PanicAnalyzer
from .config import CheckerConfig
from .logging import get_logger
from .models import CheckResult, FileReport, Finding
from .path_filter import is_under
from .source_walker import enumerate_source_files

_LOGGER = get_logger("checker")


@dataclass
class ExcludeRule:
    """A user-supplied glob matched against root-relative POSIX paths."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str) -> bool:
        if not self.pattern:
            return False
        if self.directory_only:
            if rel_path.startswith(f"{self.pattern}/"):
                return True
            parts = rel_path.split("/")[:-1]
            if self.anchored or self.has_slash:
                return any(
                    fnmatchcase("/".join(parts[: i + 1]), self.pattern) for i in range(len(parts))
                )
            return any(fnmatchcase(part, self.pattern) for part in parts)

        if self.anchored or self.has_slash:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_exclude_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern.rstrip("/")

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern.lstrip("/")

    return ExcludeRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


class PanicChecker:
    """Coordinates a panicdoc run over a single project root."""

    def __init__(self, config: CheckerConfig, analyzer: Optional[PanicAnalyzer] = None) -> None:
        self._config = config
        self._analyzer = analyzer or PanicAnalyzer(include_comments=config.include_comments)
        self._rules: List[ExcludeRule] = [
            rule for rule in (build_exclude_rule(p) for p in config.exclude_paths) if rule is not None
        ]

    @property
    def config(self) -> CheckerConfig:
        return self._config

    def iter_candidates(self) -> Iterator[Path]:
        """Yield coverable sources that survive the skip and exclude rules."""
        root = self._config.root
        skip_roots = [root / name for name in self._config.skip_dirs]
        for path in enumerate_source_files(root):
            if any(is_under(path, skipped) for skipped in skip_roots):
                _LOGGER.debug("Skipping %s (test/example tree)", path)
                continue
            rel_path = self._relative(path)
            if self._is_excluded(rel_path):
                _LOGGER.debug("Skipping %s (excluded)", rel_path)
                continue
            yield path

    def run(self) -> CheckResult:
        root = self._config.root
        _LOGGER.info("Analysing project in %s", root)
        result = CheckResult(root=root)

        candidates = list(self.iter_candidates())
        result.files_scanned = len(candidates)
        for path, findings in zip(candidates, self._analyze_all(candidates)):
            if findings:
                result.reports.append(FileReport(path=path, findings=findings))

        _LOGGER.info(
            "Scanned %d file(s); %d undocumented panic(s) found",
            result.files_scanned,
            result.total_findings,
        )
        return result

    def _analyze_all(self, paths: Sequence[Path]) -> List[List[Finding]]:
        if self._config.jobs <= 1 or len(paths) <= 1:
            return [self._analyze_one(path) for path in paths]
        # tree-sitter parsers are not shared across threads.
        include_comments = self._config.include_comments
        local = threading.local()

        def _worker(path: Path) -> List[Finding]:
            analyzer = getattr(local, "analyzer", None)
            if analyzer is None:
                analyzer = local.analyzer = PanicAnalyzer(include_comments=include_comments)
            _LOGGER.debug("Analysing %s", path)
            return analyzer.analyze(path)

        with ThreadPoolExecutor(max_workers=self._config.jobs) as executor:
            return list(executor.map(_worker, paths))

    def _analyze_one(self, path: Path) -> List[Finding]:
        _LOGGER.debug("Analysing %s", path)
        return self._analyzer.analyze(path)

    def _is_excluded(self, rel_path: str) -> bool:
        return any(rule.matches(rel_path) for rule in self._rules)

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self._config.root).as_posix()
        except ValueError:
            return path.as_posix()


__all__ = ["ExcludeRule", "PanicChecker", "build_exclude_rule"]
