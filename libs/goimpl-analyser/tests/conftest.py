"""Pytest configuration for goimpl-analyser tests."""

import shutil
from collections.abc import Callable
from pathlib import Path

import pytest

from goimpl_analyser.parser import GoSourceParser

FIXTURES_DIR = Path(__file__).parent / "goimpl_analyser" / "fixtures"


@pytest.fixture
def go_parser() -> GoSourceParser:
    """Provide a fresh Go parser."""
    return GoSourceParser()


@pytest.fixture
def testapp(tmp_path: Path) -> Path:
    """Copy the testapp Go module into a temporary directory.

    Layout:
        go.mod                          module testapp
        internal/app/app.go             App interface: Start, Stop, GetName
        pkg/something1/webserver.go     WebServer implements App
        pkg/something2/daemon.go        ServiceDaemon implements App
        pkg/something3/microservice.go  MicroService implements App
        pkg/something4/worker.go        BackgroundWorker does not
    """
    root = tmp_path / "testapp"
    shutil.copytree(FIXTURES_DIR / "testapp", root)
    return root


@pytest.fixture
def write_go(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing a source file below tmp_path.

    The helper creates parent directories and returns the written path.
    """

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
