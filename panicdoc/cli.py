"""CLI entrypoint for panicdoc."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

from .checker import PanicChecker
from .config import ConfigError, load_config, resolve_root
from .logging import COLOR_CHOICES, configure_logging
from .models import CheckResult


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panicdoc",
        description="Find public Rust functions that may panic without documenting it.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--manifest-path",
        type=Path,
        default=None,
        help="Path to Cargo.toml; its directory becomes the project root.",
    )
    parser.add_argument(
        "--color",
        choices=COLOR_CHOICES,
        default="auto",
        help="Colourise log output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Exclude files matching GLOB (relative to the root). May be repeated.",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=None,
        help="Number of files analysed concurrently.",
    )
    parser.add_argument(
        "--include-comments",
        action="store_true",
        default=None,
        help="Also treat risk words inside // comments as panics.",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for findings.",
    )
    parser.add_argument(
        "--deny",
        action="store_true",
        help="Exit with status 1 when undocumented panics are found.",
    )
    return parser


def render_text(result: CheckResult) -> List[str]:
    lines: List[str] = []
    for report in result.reports:
        rel_path = _relativize(report.path, result.root)
        for finding in report.findings:
            lines.append(f"{rel_path}: {finding}")
    return lines


def render_json(result: CheckResult) -> str:
    findings: List[Dict[str, object]] = []
    for report in result.reports:
        rel_path = _relativize(report.path, result.root)
        for finding in report.findings:
            findings.append(
                {
                    "path": rel_path,
                    "name": finding.ident,
                    "start_line": finding.span.start_line,
                    "end_line": finding.span.end_line,
                }
            )
    payload = {
        "root": str(result.root),
        "files_scanned": result.files_scanned,
        "findings": findings,
    }
    return json.dumps(payload, indent=2)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for panicdoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), color=args.color)

    try:
        root = resolve_root(
            Path(args.path) if args.path else None,
            manifest_path=args.manifest_path,
        )
        config = load_config(root)
    except (FileNotFoundError, NotADirectoryError, ConfigError) as exc:
        parser.exit(2, f"{exc}\n")

    config.exclude_paths.extend(args.exclude)
    if args.jobs is not None:
        if args.jobs < 1:
            parser.exit(2, "--jobs must be a positive integer\n")
        config.jobs = args.jobs
    if args.include_comments is not None:
        config.include_comments = bool(args.include_comments)

    result = PanicChecker(config).run()

    if args.format == "json":
        print(render_json(result))
    else:
        for line in render_text(result):
            print(line)

    if args.deny and result.total_findings:
        return 1
    return 0


def _relativize(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
