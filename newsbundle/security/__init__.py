"""Credential resolution exports."""

from .credential_provider import (
    ApiCredentials,
    ChainedSecretProvider,
    EnvSecretProvider,
    FileSecretProvider,
    MappingSecretProvider,
    SecretNotFoundError,
    SecretProvider,
    build_secret_provider,
    resolve_credentials,
)

__all__ = [
    "ApiCredentials",
    "ChainedSecretProvider",
    "EnvSecretProvider",
    "FileSecretProvider",
    "MappingSecretProvider",
    "SecretNotFoundError",
    "SecretProvider",
    "build_secret_provider",
    "resolve_credentials",
]
