"""Secret resolution for the API key id and shared secret."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from ..errors import ConfigurationError
from ..settings import CredentialSettings


class SecretNotFoundError(KeyError):
    """Raised when a secret cannot be resolved."""


class SecretProvider(ABC):
    """Abstract secret lookup contract."""

    @abstractmethod
    def get_secret(self, key: str) -> str:
        """Return the secret associated with ``key``."""


class EnvSecretProvider(SecretProvider):
    """Reads secrets from process environment variables."""

    def __init__(self, env: Mapping[str, str] | None = None, *, prefix: str = "") -> None:
        self._env = env if env is not None else os.environ
        self._prefix = prefix

    def get_secret(self, key: str) -> str:
        compound = f"{self._prefix}{key}" if self._prefix else key
        try:
            value = self._env[compound.upper().replace(".", "_")]
        except KeyError as exc:
            raise SecretNotFoundError(compound) from exc
        if not value:
            raise SecretNotFoundError(compound)
        return value


class FileSecretProvider(SecretProvider):
    """Loads secrets from one section of an INI-style file.

    Keys are matched case-insensitively, so ``NEWS_API_ID`` finds
    ``news_api_id = ...`` under ``[credentials]``.
    """

    def __init__(self, path: Path, *, section: str = "credentials") -> None:
        self._path = path
        self._section = section
        self._parser = ConfigParser()
        if path.exists():
            self._parser.read(path, encoding="utf-8")

    def get_secret(self, key: str) -> str:
        if self._parser.has_option(self._section, key):
            value = self._parser.get(self._section, key)
            if value:
                return value
        raise SecretNotFoundError(key)


class MappingSecretProvider(SecretProvider):
    """Wraps a simple dictionary for testing."""

    def __init__(self, mapping: Mapping[str, str]) -> None:
        self._mapping = mapping

    def get_secret(self, key: str) -> str:
        try:
            return self._mapping[key]
        except KeyError as exc:
            raise SecretNotFoundError(key) from exc


class ChainedSecretProvider(SecretProvider):
    """Tries multiple providers until one returns a secret."""

    def __init__(self, providers: Iterable[SecretProvider]) -> None:
        self._providers = tuple(providers)

    def get_secret(self, key: str) -> str:
        for provider in self._providers:
            try:
                return provider.get_secret(key)
            except SecretNotFoundError:
                continue
        raise SecretNotFoundError(key)


@dataclass(frozen=True, slots=True)
class ApiCredentials:
    """API key identifier and base64 secret issued for a channel."""

    api_id: str
    api_secret: str

    def __post_init__(self) -> None:
        if not isinstance(self.api_id, str) or not self.api_id.strip():
            raise ConfigurationError("config.apiId: API ID is required")
        if not isinstance(self.api_secret, str) or not self.api_secret.strip():
            raise ConfigurationError("config.apiSecret: API secret is required.")

    def __repr__(self) -> str:
        return f"ApiCredentials(api_id={self.api_id!r}, api_secret='***')"


def build_secret_provider(
    settings: CredentialSettings,
    *,
    env: Mapping[str, str] | None = None,
) -> SecretProvider:
    """Environment variables first, then the optional secrets file."""
    providers: list[SecretProvider] = [EnvSecretProvider(env)]
    if settings.secrets_file is not None:
        providers.append(FileSecretProvider(settings.secrets_file))
    return ChainedSecretProvider(providers)


def resolve_credentials(
    settings: CredentialSettings,
    provider: SecretProvider | None = None,
) -> ApiCredentials:
    provider = provider or build_secret_provider(settings)
    values: dict[str, str] = {}
    for field_name, key in (
        ("api_id", settings.api_id_key),
        ("api_secret", settings.api_secret_key),
    ):
        try:
            values[field_name] = provider.get_secret(key)
        except SecretNotFoundError as exc:
            raise ConfigurationError(
                f"Missing credential {key}",
                details={"key": key},
            ) from exc
    return ApiCredentials(**values)


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
