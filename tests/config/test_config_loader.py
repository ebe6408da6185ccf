# tests/config/test_config_loader.py

import pytest
from pydantic import ValidationError

from solar_cli.config.config_loader import (
    ConfigError,
    RelayConfig,
    SolarCliConfig,
    get_relay_config,
)
from solar_cli.config.settings import Settings


def test_packaged_relay_config():
    config = get_relay_config()
    assert config.network in ("mainnet", "testnet")
    assert config.node_ip.startswith(("http://", "https://"))


def test_load_from_directory(tmp_path):
    (tmp_path / "relay.yaml").write_text(
        "relay:\n  network: MAINNET\n  node_ip: 10.1.2.3:6003/api/\n", encoding="utf-8"
    )
    config = SolarCliConfig(str(tmp_path))
    assert config.relay == RelayConfig(network="mainnet", node_ip="http://10.1.2.3:6003/api")


def test_missing_file_falls_back_to_defaults(tmp_path):
    config = SolarCliConfig(str(tmp_path))
    assert config.relay == RelayConfig()


def test_unknown_network_is_rejected(tmp_path):
    (tmp_path / "relay.yaml").write_text("relay:\n  network: devnet\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        SolarCliConfig(str(tmp_path))


def test_broken_yaml_is_rejected(tmp_path):
    (tmp_path / "relay.yaml").write_text("relay: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        SolarCliConfig(str(tmp_path))


def test_non_mapping_yaml_is_rejected(tmp_path):
    (tmp_path / "relay.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        SolarCliConfig(str(tmp_path))


def test_relay_config_is_frozen():
    config = RelayConfig()
    with pytest.raises(ValidationError):
        config.network = "mainnet"


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("SOLARCLI_LOG_LEVEL", "debug")
    monkeypatch.setenv("SOLARCLI_HTTP_CLIENT_TIMEOUT", "5")
    settings = Settings(_env_file=None)
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.HTTP_CLIENT_TIMEOUT == 5.0


def test_settings_unknown_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("SOLARCLI_LOG_LEVEL", "chatty")
    assert Settings(_env_file=None).LOG_LEVEL == "WARNING"
