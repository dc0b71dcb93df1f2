"""Pytest configuration and shared fixtures for kumiko tests."""

from __future__ import annotations

import itertools
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from builders import lines_map, make_line
from kumiko.domain.value_objects import Line

FIXTURES_PATH = Path(__file__).parent / "fixtures" / "designs"


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI, API or file system"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic id generator: id_1, id_2, ..."""
    counter = itertools.count(1)
    return lambda: f"id_{next(counter)}"


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def load_fixture() -> Callable[[str], dict[str, Any]]:
    """Load a design fixture as a dictionary."""

    def _load(name: str) -> dict[str, Any]:
        return json.loads((FIXTURES_PATH / name).read_text(encoding="utf-8"))

    return _load


@pytest.fixture
def cross_lines() -> dict[str, Line]:
    """A horizontal and a vertical line crossing at (5, 5)."""
    return lines_map(make_line("h", 0, 5, 10, 5), make_line("v", 5, 0, 5, 10))
