"""Configuration for the monorepo tooling.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Everything has a usable default, so `valesc` works in a bare checkout. A GitHub
token is optional; anonymous requests are enough for a handful of issue lookups.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TRACKING_EXCLUDE: list[str] = [
    "/src/valesc_tools/**",
    "/tests/**",
]

DEFAULT_LICENSE_EXCLUDE: list[str] = [
    ".git/**",
    ".direnv/**",
    "**/target/**",
    "result/**",
    "flake.lock",
    "**/Cargo.lock",
    ".gitignore",
    "gitignore.d/**",
]


class ToolSettings(BaseSettings):
    """Settings for the `valesc` command line.

    Environment variables:
    - VALESC_ROOT           (optional, discovered from `flake.nix` otherwise)
    - LOG_LEVEL             (optional)
    - VALESC_GITHUB_TOKEN   (optional)
    - GITHUB_API_URL        (optional)

    Notes:
        Tests can skip the `.env` file via `ToolSettings(_env_file=None)`.
    """

    root: Path | None = Field(
        default=None,
        validation_alias="VALESC_ROOT",
        description="Monorepo root; discovered from the working directory when unset",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    color: bool = Field(
        default=True,
        validation_alias="VALESC_COLOR",
        description="Color console output when stdout is a terminal",
    )

    github_api_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_API_URL",
        description="GitHub REST API base URL",
    )
    github_web_host: str = Field(
        default="github.com",
        validation_alias="VALESC_TRACKER_HOST",
        description="Web host whose issue URLs get live status annotation",
    )
    github_token: str = Field(
        default="",
        validation_alias="VALESC_GITHUB_TOKEN",
        description="Optional token, raises the anonymous rate limit",
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        validation_alias="VALESC_HTTP_TIMEOUT",
        description="Per-request timeout for issue lookups",
    )

    rg_executable: str = Field(default="rg", validation_alias="VALESC_RG")
    addlicense_executable: str = Field(default="addlicense", validation_alias="VALESC_ADDLICENSE")

    license_holder: str = Field(
        default="VALESC digital artisans",
        validation_alias="VALESC_LICENSE_HOLDER",
        description="Copyright holder stamped by addlicense",
    )
    license_type: str = Field(
        default="mpl",
        validation_alias="VALESC_LICENSE",
        description="License identifier understood by addlicense (apache, bsd, mit, mpl)",
    )
    license_spdx: bool = Field(
        default=True,
        validation_alias="VALESC_LICENSE_SPDX",
        description="Append an SPDX-License-Identifier line to stamped headers",
    )

    fragments_dir: Path = Field(
        default=Path("gitignore.d"),
        validation_alias="VALESC_GITIGNORE_FRAGMENTS",
        description="Directory, relative to the root, holding .gitignore fragments",
    )
    tracking_exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRACKING_EXCLUDE),
        validation_alias="VALESC_TRACKING_EXCLUDE",
        description="Globs skipped when scanning for markers",
    )
    license_exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LICENSE_EXCLUDE),
        validation_alias="VALESC_LICENSE_EXCLUDE",
        description="Globs skipped by addlicense",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("fragments_dir")
    @classmethod
    def _fragments_dir_is_relative(cls, value: Path) -> Path:
        if value.is_absolute():
            raise ValueError("fragments_dir must be relative to the monorepo root")
        return value
