"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from valesc_tools.paths import RepoPaths
from valesc_tools.process import CommandResult, CommandRunner

_SETTINGS_ENV_VARS = (
    "FORCE_COLOR",
    "TTY_COMPATIBLE",
    "VALESC_ROOT",
    "LOG_LEVEL",
    "VALESC_COLOR",
    "GITHUB_API_URL",
    "VALESC_TRACKER_HOST",
    "VALESC_GITHUB_TOKEN",
    "VALESC_HTTP_TIMEOUT",
    "VALESC_RG",
    "VALESC_ADDLICENSE",
    "VALESC_LICENSE_HOLDER",
    "VALESC_LICENSE",
    "VALESC_LICENSE_SPDX",
    "VALESC_GITIGNORE_FRAGMENTS",
    "VALESC_TRACKING_EXCLUDE",
    "VALESC_LICENSE_EXCLUDE",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Isolate settings from the host environment and any `.env` in the checkout."""

    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Provide a temporary monorepo root."""

    root = tmp_path / "monorepo"
    root.mkdir()
    (root / "flake.nix").write_text("{}\n", encoding="utf-8")
    return root


@pytest.fixture
def repo_paths(repo_root: Path) -> RepoPaths:
    return RepoPaths(repo_root)


@pytest.fixture
def make_result() -> Callable[..., CommandResult]:
    def _make(returncode: int = 0, stdout: str = "", stderr: str = "", args=("rg",)) -> CommandResult:
        return CommandResult(args=tuple(args), returncode=returncode, stdout=stdout, stderr=stderr)

    return _make


@pytest.fixture
def runner() -> Mock:
    """A mocked external command runner."""

    return Mock(spec=CommandRunner)
