"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from valesc_tools.config import DEFAULT_TRACKING_EXCLUDE, ToolSettings


def test_settings_defaults(clean_env: Path) -> None:
    settings = ToolSettings()

    assert settings.root is None
    assert settings.log_level == "INFO"
    assert settings.color is True
    assert settings.github_api_url == "https://api.github.com"
    assert settings.github_web_host == "github.com"
    assert settings.github_token == ""
    assert settings.http_timeout_seconds == 5.0
    assert settings.fragments_dir == Path("gitignore.d")
    assert settings.tracking_exclude == DEFAULT_TRACKING_EXCLUDE
    assert settings.license_type == "mpl"
    assert settings.license_spdx is True


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                f"VALESC_ROOT={clean_env}",
                "LOG_LEVEL=debug",
                "VALESC_GITHUB_TOKEN=test-token",
                "VALESC_HTTP_TIMEOUT=2.5",
                'VALESC_LICENSE_EXCLUDE=["vendor/**"]',
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ToolSettings()

    assert settings.root == clean_env
    assert settings.log_level == "DEBUG"
    assert settings.github_token == "test-token"
    assert settings.http_timeout_seconds == 2.5
    assert settings.license_exclude == ["vendor/**"]


def test_environment_overrides_dotenv(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (clean_env / ".env").write_text("VALESC_LICENSE=mit\n", encoding="utf-8")
    monkeypatch.setenv("VALESC_LICENSE", "bsd")

    assert ToolSettings().license_type == "bsd"


def test_settings_accept_field_names(clean_env: Path) -> None:
    settings = ToolSettings(license_holder="Someone", rg_executable="/opt/rg")

    assert settings.license_holder == "Someone"
    assert settings.rg_executable == "/opt/rg"


@pytest.mark.parametrize(
    "env",
    [
        {"VALESC_HTTP_TIMEOUT": "0"},
        {"LOG_LEVEL": "chatty"},
        {"VALESC_GITIGNORE_FRAGMENTS": "/abs/fragments"},
    ],
)
def test_invalid_settings_are_rejected(
    clean_env: Path, monkeypatch: pytest.MonkeyPatch, env: dict[str, str]
) -> None:
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    with pytest.raises(ValidationError):
        ToolSettings()


def test_default_tracking_exclusions_are_anchored_to_root() -> None:
    assert DEFAULT_TRACKING_EXCLUDE == ["/src/valesc_tools/**", "/tests/**"]


def test_license_spdx_can_be_disabled(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VALESC_LICENSE_SPDX", "false")

    assert ToolSettings().license_spdx is False
