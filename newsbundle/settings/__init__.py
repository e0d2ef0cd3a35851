"""Settings package exports."""

from .loader import (
    CONFIG_ENV_VAR,
    ApiSettings,
    AppConfig,
    CredentialSettings,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "ApiSettings",
    "AppConfig",
    "CredentialSettings",
    "load_config",
]
