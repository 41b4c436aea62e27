"""Shared test fixtures."""

from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient

from mdv.core.shutdown import ShutdownSignal
from mdv.server import create_app


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Keep config discovery and MDV_* variables from leaking into tests.

    The working directory lives outside tmp_path so tests can list tmp_path.
    """
    monkeypatch.chdir(tmp_path_factory.mktemp("cwd"))
    monkeypatch.setattr(
        "mdv.config.USER_CONFIG_PATH", tmp_path_factory.mktemp("home") / "mdv.toml"
    )
    for name in ("MDV_HOST", "MDV_PORT", "MDV_OPEN", "MDV_TARGET_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create a served root with a small Markdown tree."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "index.md").write_text("# Home\n\nWelcome.")

    guides = docs / "guides"
    guides.mkdir()
    (guides / "setup.md").write_text("# Setup\n\nSee [usage](usage.md).")
    (guides / "usage.md").write_text("# Usage\n\nRun it.")
    (guides / "notes.txt").write_text("not markdown")

    return docs


@pytest.fixture
def shutdown_signal() -> ShutdownSignal:
    return ShutdownSignal()


@pytest.fixture
def app(docs_dir: Path, shutdown_signal: ShutdownSignal) -> web.Application:
    return create_app(docs_dir, shutdown=shutdown_signal)


@pytest.fixture
def client(app: web.Application, aiohttp_client) -> TestClient:
    """Create test client with configured app."""
    return aiohttp_client(app)
