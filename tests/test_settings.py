from __future__ import annotations

from pathlib import Path

import pytest

from newsbundle.errors import ConfigurationError
from newsbundle.security import (
    ApiCredentials,
    ChainedSecretProvider,
    EnvSecretProvider,
    FileSecretProvider,
    MappingSecretProvider,
    SecretNotFoundError,
    build_secret_provider,
    resolve_credentials,
)
from newsbundle.settings import CONFIG_ENV_VAR, CredentialSettings, load_config


def test_defaults_when_no_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr("newsbundle.settings.loader.PROJECT_ROOT", tmp_path)

    config = load_config()

    assert config.api.host == "news-api.apple.com"
    assert config.api.port is None
    assert config.api.verify_tls is True
    assert config.credentials.api_id_key == "NEWS_API_ID"


def test_load_config_reads_toml(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "[api]\n"
        'host = "localhost"\n'
        "port = 8443\n"
        "timeout = 5\n"
        "verify_tls = false\n"
        "[credentials]\n"
        'api_id_env = "MY_ID"\n'
        'api_secret_env = "MY_SECRET"\n'
        f'secrets_file = "{(tmp_path / "secrets.ini").as_posix()}"\n',
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.api.host == "localhost"
    assert config.api.port == 8443
    assert config.api.timeout == 5.0
    assert config.api.verify_tls is False
    assert config.credentials.api_id_key == "MY_ID"
    assert config.credentials.secrets_file == tmp_path / "secrets.ini"


def test_explicit_missing_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.toml")


@pytest.mark.parametrize(
    "body",
    [
        '[api]\nverify_tls = "no"\n',
        "[api]\nport = 70000\n",
        '[api]\ntimeout = "soon"\n',
        '[api]\nhost = ""\n',
        "[api\n",
    ],
)
def test_invalid_config_values(tmp_path: Path, body: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_env_provider_reads_injected_mapping() -> None:
    provider = EnvSecretProvider({"NEWS_API_ID": "abc"})
    assert provider.get_secret("NEWS_API_ID") == "abc"
    with pytest.raises(SecretNotFoundError):
        provider.get_secret("NEWS_API_SECRET")


def test_file_provider_matches_keys_case_insensitively(tmp_path: Path) -> None:
    path = tmp_path / "secrets.ini"
    path.write_text("[credentials]\nnews_api_secret = c2VjcmV0\n", encoding="utf-8")
    assert FileSecretProvider(path).get_secret("NEWS_API_SECRET") == "c2VjcmV0"


def test_chained_provider_falls_through() -> None:
    provider = ChainedSecretProvider(
        [MappingSecretProvider({}), MappingSecretProvider({"k": "v"})]
    )
    assert provider.get_secret("k") == "v"
    with pytest.raises(SecretNotFoundError):
        provider.get_secret("missing")


def test_resolve_credentials_from_env_then_file(tmp_path: Path) -> None:
    secrets_file = tmp_path / "secrets.ini"
    secrets_file.write_text("[credentials]\nnews_api_secret = c2VjcmV0\n", encoding="utf-8")
    settings = CredentialSettings(secrets_file=secrets_file)

    provider = build_secret_provider(settings, env={"NEWS_API_ID": "key-id"})
    credentials = resolve_credentials(settings, provider)

    assert credentials == ApiCredentials(api_id="key-id", api_secret="c2VjcmV0")
    assert "c2VjcmV0" not in repr(credentials)


def test_missing_credential_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        resolve_credentials(CredentialSettings(), MappingSecretProvider({"NEWS_API_ID": "x"}))
    assert excinfo.value.details == {"key": "NEWS_API_SECRET"}


@pytest.mark.parametrize(("api_id", "api_secret"), [("", "c2VjcmV0"), ("id", ""), (None, "c2VjcmV0")])
def test_credentials_must_be_non_empty_strings(api_id: object, api_secret: object) -> None:
    with pytest.raises(ConfigurationError):
        ApiCredentials(api_id=api_id, api_secret=api_secret)  # type: ignore[arg-type]
