"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from elide_bridge.core.errors import ToolExecutionFailed
from elide_bridge.core.models.tool import ToolReference
from tests.helpers import FAKE_ELIDE, FakeRunner


@pytest.fixture
def elide_bin(tmp_path: Path) -> Path:
    """An executable fake ``elide`` in its own bin directory."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "elide"
    script.write_text(FAKE_ELIDE)
    script.chmod(0o755)
    return script


@pytest.fixture
def tool() -> ToolReference:
    return ToolReference(path=Path("/opt/elide/bin/elide"))


@pytest.fixture
def java_home(tmp_path: Path) -> Path:
    """A fake JDK layout with a writable bin directory."""
    home = tmp_path / "jdk"
    (home / "bin").mkdir(parents=True)
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def install_failure() -> ToolExecutionFailed:
    return ToolExecutionFailed(["elide", "install"], 2, "boom")


@pytest.fixture
def restore_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
