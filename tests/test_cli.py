"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from panicdoc.cli import _build_parser, main
from tests._fixtures.crate_builder import CrateBuilder


def _crate(crate_builder: CrateBuilder) -> None:
    crate_builder.write(
        {
            "Cargo.toml": '[package]\nname = "demo"\n',
            "src/lib.rs": """
                /// Nothing to see here
                pub fn foobar() {
                    panic!("mwhahahahaha");
                }

                pub mod inner {
                    pub fn f() { x.unwrap(); }
                }
            """,
            "tests/it.rs": "pub fn t() { panic!() }\n",
        }
    )


def test_cli_parser_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.path is None
    assert args.color == "auto"
    assert args.verbose is False
    assert args.exclude == []
    assert args.format == "text"
    assert args.deny is False


def test_cli_parser_accepts_repeated_excludes() -> None:
    args = _build_parser().parse_args(["--exclude", "a/", "--exclude", "*.rs", "-j", "2"])
    assert args.exclude == ["a/", "*.rs"]
    assert args.jobs == 2


def test_cli_rejects_unknown_color() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--color", "sometimes"])


def test_cli_prints_findings(crate_builder: CrateBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    _crate(crate_builder)

    status = main(["--color", "never", "--manifest-path", str(crate_builder.path("Cargo.toml"))])

    out = capsys.readouterr().out.splitlines()
    assert status == 0
    assert out == ["src/lib.rs: foobar 1:4", "src/lib.rs: inner::f 7:7"]


def test_cli_deny_sets_exit_status(crate_builder: CrateBuilder) -> None:
    _crate(crate_builder)

    assert main(["--color", "never", "--deny", str(crate_builder.path())]) == 1
    assert main(["--color", "never", "--deny", "--exclude", "src/", str(crate_builder.path())]) == 0


def test_cli_json_output(crate_builder: CrateBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    _crate(crate_builder)

    main(["--color", "never", "--format", "json", str(crate_builder.path())])

    payload = json.loads(capsys.readouterr().out)
    assert payload["files_scanned"] == 1
    assert payload["findings"][0] == {
        "path": "src/lib.rs",
        "name": "foobar",
        "start_line": 1,
        "end_line": 4,
    }


def test_cli_reports_missing_root(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--color", "never", str(tmp_path / "missing")])

    assert excinfo.value.code == 2
    assert "not found" in capsys.readouterr().err
