"""Shared test fixtures for livelint."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from livelint.core.engine import LintEngine
from livelint.utils.metrics import MetricsRegistry


@pytest.fixture(autouse=True)
def fresh_metrics() -> Iterator[None]:
    """Give every test its own metrics registry."""
    MetricsRegistry.reset_instance()
    yield
    MetricsRegistry.reset_instance()


@pytest.fixture
def engine() -> LintEngine:
    """Create an engine with the built-in rule tables."""
    return LintEngine()


@pytest.fixture
def python_source() -> str:
    """A small Python buffer with two typos and a missing colon."""
    return "\n".join(
        [
            "improt os",
            "",
            "def main()",
            "    retrun os.getcwd()",
        ]
    )


@pytest.fixture
def js_source() -> str:
    """A JavaScript buffer with an unclosed brace and a typo."""
    return "\n".join(
        [
            "// entry point",
            "funtcion start() {",
            "  const total = items.lenght;",
            "  return total;",
        ]
    )


@pytest.fixture
def write_source(tmp_path: Path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
