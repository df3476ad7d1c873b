"""Configuration helpers for the ses-verify-identity CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ses_identity.client import DEFAULT_ENDPOINT
from ses_identity.credentials import CREDENTIALS_FILE_ENV_VAR

DEFAULT_CONFIG_PATH = Path.home() / ".ses_identity" / "config.toml"
DEFAULT_TIMEOUT = 30.0
ENDPOINT_ENV_VAR = "SES_ENDPOINT"


@dataclass(frozen=True)
class CLIConfig:
    endpoint: str = DEFAULT_ENDPOINT
    credentials_file: str | None = None
    timeout: float = DEFAULT_TIMEOUT


class ConfigError(ValueError):
    """Raised when CLI config is invalid."""


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc

    try:  # Python 3.11+
        import tomllib  # type: ignore[attr-defined]
        try:
            return tomllib.loads(raw)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc
    except ModuleNotFoundError:
        try:
            import tomli
        except ModuleNotFoundError as exc:
            raise ConfigError("toml parser unavailable; install tomli for Python < 3.11") from exc
        try:
            return tomli.loads(raw)
        except tomli.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _to_timeout(value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError("timeout must be a positive number")
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError("timeout must be a positive number") from exc
    if timeout <= 0:
        raise ConfigError("timeout must be a positive number")
    return timeout


def load_cli_config(path: str | Path | None = None) -> CLIConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    parsed: dict[str, Any] = _load_toml(config_path) if config_path.exists() else {}

    section = parsed.get("cli")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[cli] must be a table")

    env_endpoint = os.getenv(ENDPOINT_ENV_VAR)
    configured_endpoint = str(source.get("endpoint", DEFAULT_ENDPOINT)).strip()
    endpoint = env_endpoint.strip() if env_endpoint and env_endpoint.strip() else configured_endpoint
    if not endpoint:
        raise ConfigError("endpoint must not be empty")

    # AWS_CREDENTIALS_FILE is consulted at resolution time; the config value is the fallback.
    credentials_file_raw = source.get("credentials_file")
    if credentials_file_raw is None:
        credentials_file = None
    else:
        credentials_file = str(credentials_file_raw).strip() or None

    timeout = _to_timeout(source.get("timeout", DEFAULT_TIMEOUT))

    return CLIConfig(endpoint=endpoint, credentials_file=credentials_file, timeout=timeout)


__all__ = [
    "CLIConfig",
    "ConfigError",
    "CREDENTIALS_FILE_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ENDPOINT_ENV_VAR",
    "load_cli_config",
]
