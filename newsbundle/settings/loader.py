"""Helpers for loading client configuration."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_NAME = "config.toml"
CONFIG_ENV_VAR = "NEWSBUNDLE_CONFIG"
DEFAULT_HOST = "news-api.apple.com"


@dataclass(slots=True)
class ApiSettings:
    host: str = DEFAULT_HOST
    port: int | None = None
    timeout: float = 30.0
    verify_tls: bool = True


@dataclass(slots=True)
class CredentialSettings:
    api_id_key: str = "NEWS_API_ID"
    api_secret_key: str = "NEWS_API_SECRET"
    secrets_file: Path | None = None


@dataclass(slots=True)
class AppConfig:
    api: ApiSettings
    credentials: CredentialSettings


def _to_path(value: str | None, *, fallback: Path | None) -> Path | None:
    if not value:
        return fallback
    candidate = Path(value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _config_path(explicit: str | os.PathLike[str] | None = None) -> tuple[Path, bool]:
    """Return the config path and whether it was explicitly requested."""
    if explicit:
        candidate = Path(explicit)
        required = True
    else:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        candidate = Path(env_value) if env_value else PROJECT_ROOT / DEFAULT_CONFIG_NAME
        required = bool(env_value)
    path = candidate if candidate.is_absolute() else PROJECT_ROOT / candidate
    return path, required


def _load_toml(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}", details={"path": str(path)})
        return {}
    try:
        with path.open("rb") as fp:
            return tomllib.load(fp)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(
            "Config file is not valid TOML",
            details={"path": str(path), "reason": str(exc)},
        ) from exc


def _build_api(section: dict[str, Any]) -> ApiSettings:
    host = section.get("host", DEFAULT_HOST)
    if not isinstance(host, str) or not host.strip():
        raise ConfigurationError("api.host must be a non-empty string", details={"host": host})

    port_raw = section.get("port")
    port: int | None
    if port_raw is None or port_raw == "":
        port = None
    else:
        try:
            port = int(port_raw)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("api.port must be an integer", details={"port": port_raw}) from exc
        if not 0 < port < 65536:
            raise ConfigurationError("api.port is out of range", details={"port": port})

    try:
        timeout = float(section.get("timeout", 30))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            "api.timeout must be a number", details={"timeout": section.get("timeout")}
        ) from exc
    if timeout <= 0:
        raise ConfigurationError("api.timeout must be positive", details={"timeout": timeout})

    verify_tls = section.get("verify_tls", True)
    if not isinstance(verify_tls, bool):
        raise ConfigurationError(
            "api.verify_tls must be true or false", details={"verify_tls": verify_tls}
        )

    return ApiSettings(host=host.strip(), port=port, timeout=timeout, verify_tls=verify_tls)


def _build_credentials(section: dict[str, Any]) -> CredentialSettings:
    defaults = CredentialSettings()
    api_id_key = section.get("api_id_env", defaults.api_id_key)
    api_secret_key = section.get("api_secret_env", defaults.api_secret_key)
    for name, value in (("api_id_env", api_id_key), ("api_secret_env", api_secret_key)):
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"credentials.{name} must be a non-empty string")
    return CredentialSettings(
        api_id_key=api_id_key,
        api_secret_key=api_secret_key,
        secrets_file=_to_path(section.get("secrets_file"), fallback=None),
    )


def load_config(config_path: str | os.PathLike[str] | None = None) -> AppConfig:
    path, required = _config_path(config_path)
    data = _load_toml(path, required=required)

    return AppConfig(
        api=_build_api(data.get("api", {})),
        credentials=_build_credentials(data.get("credentials", {})),
    )
