from __future__ import annotations

import pytest

from scanstock_sdk import ConfigError, load_config


def test_load_config_defaults() -> None:
    config = load_config()

    assert config.env_name == "dev"
    assert config.api_base_url == "https://api.example.com"
    assert config.connect_timeout_seconds == 5.0
    assert config.read_timeout_seconds == 10.0
    assert config.retries == 2
    assert config.max_connections == 10
    assert config.verify_ssl is True


def test_env_specific_base_url_wins(monkeypatch) -> None:
    monkeypatch.setenv("SCANSTOCK_ENV", "prod")
    monkeypatch.setenv("SCANSTOCK_API_BASE_URL_PROD", "https://prod.example.com/api/")

    config = load_config()

    assert config.env_name == "prod"
    assert config.api_base_url == "https://prod.example.com/api"


def test_missing_base_url_raises(monkeypatch) -> None:
    monkeypatch.delenv("SCANSTOCK_API_BASE_URL")

    with pytest.raises(ConfigError, match="SCANSTOCK_API_BASE_URL"):
        load_config()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SCANSTOCK_TIMEOUT_SECONDS", "abc"),
        ("SCANSTOCK_TIMEOUT_SECONDS", "0"),
        ("SCANSTOCK_RETRIES", "-1"),
        ("SCANSTOCK_MAX_CONNECTIONS", "0"),
    ],
)
def test_invalid_numeric_values_name_the_variable(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=name):
        load_config()


def test_verify_ssl_and_data_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SCANSTOCK_VERIFY_SSL", "false")
    monkeypatch.setenv("SCANSTOCK_DATA_DIR", str(tmp_path))

    config = load_config()

    assert config.verify_ssl is False
    assert config.data_dir == str(tmp_path)
