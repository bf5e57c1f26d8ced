"""Core configuration.

- Environment variables are read once through pydantic-settings so the CLI
  and the services share one typed contract.
- A per-user `.env` lets installed copies be configured without touching the
  project checkout.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_APP_DIR_NAME = "vm-links"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / _APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / _APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / _APP_DIR_NAME
    return Path.home() / ".config" / _APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global `.env`.

    Keys with a `None` value are left untouched.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# vm-links user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Values come from `VM_LINKS_*` environment variables, the project `.env`
    and then the user's global `.env`, in that order.
    """

    model_config = SettingsConfigDict(
        env_prefix="VM_LINKS_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_path: str = Field(
        default="/api/kubernetes",
        description="API base path of the hosting console (k8sBasePath).",
    )
    default_namespace: str = Field(
        default="default",
        min_length=1,
        description="Namespace used by route builders when none is given.",
    )

    max_hostname_parts: int = Field(
        default=3,
        ge=1,
        le=64,
        description="Hostname labels kept when shortening URLs for display.",
    )
    max_pathname_parts: int = Field(
        default=3,
        ge=1,
        le=256,
        description="Path segments kept when shortening URLs for display.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level used by the CLI (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown log level: {value!r}")
        return normalized


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a basic stderr handler on the root logger.

    Only entry points call this; library modules just create module loggers.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
