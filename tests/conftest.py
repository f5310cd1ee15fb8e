from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.crate_builder import CrateBuilder


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's CARGO_HOME and log level out of the tests."""
    monkeypatch.delenv("CARGO_HOME", raising=False)
    monkeypatch.delenv("PANICDOC_LOG", raising=False)


@pytest.fixture
def crate_builder(tmp_path: Path) -> CrateBuilder:
    """Provide a reusable crate builder rooted at the pytest tmp_path."""
    return CrateBuilder(tmp_path)
