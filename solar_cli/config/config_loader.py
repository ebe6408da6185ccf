"""
Configuration loader for solar-cli
Loads the static relay configuration shipped with the package
"""

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)

RELAY_CONFIG_FILE = "relay.yaml"


class ConfigError(Exception):
    """Configuration loading error"""

    pass


class RelayConfig(BaseModel):
    """Relay endpoint: network preset name and node API address"""

    model_config = ConfigDict(frozen=True)

    network: Literal["mainnet", "testnet"] = "testnet"
    node_ip: str = "http://127.0.0.1:6003/api"

    @field_validator("network", mode="before")
    def normalize_network(cls, value: Any):
        return str(value).lower().strip()

    @field_validator("node_ip")
    def validate_node_ip(cls, value: str):
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            value = f"http://{value}"
        return value.rstrip("/")


class SolarCliConfig:
    """Main configuration manager"""

    def __init__(self, config_dir: Optional[str] = None):
        if config_dir is None:
            config_dir = Path(__file__).parent

        self.config_dir = Path(config_dir)
        self._relay: Optional[RelayConfig] = None

        self._load_configs()

    def _load_yaml_file(self, filename: str) -> Dict[str, Any]:
        """Load YAML configuration file"""
        file_path = self.config_dir / filename

        if not file_path.exists():
            logger.warning(f"Config file not found: {file_path}")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                logger.debug(f"Loaded config: {filename}")
                return config or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading config {filename}: {e}")
            raise ConfigError(f"Failed to load {filename}: {e}") from e

    def _load_configs(self):
        relay_data = self._load_yaml_file(RELAY_CONFIG_FILE)
        if not isinstance(relay_data, dict):
            raise ConfigError(f"{RELAY_CONFIG_FILE} must contain a mapping")
        try:
            self._relay = RelayConfig(**(relay_data.get("relay") or {}))
        except ValidationError as e:
            logger.error(f"Invalid relay configuration: {e}")
            raise ConfigError(f"Invalid relay configuration: {e}") from e

    @property
    def relay(self) -> RelayConfig:
        """Get relay configuration"""
        if self._relay is None:
            self._relay = RelayConfig()
        return self._relay

    def reload(self):
        """Reload all configurations"""
        logger.info("Reloading configurations...")
        self._load_configs()


# Global instance
_config_instance: Optional[SolarCliConfig] = None


def get_config(config_dir: Optional[str] = None) -> SolarCliConfig:
    """Get the global configuration instance"""
    global _config_instance

    if _config_instance is None:
        _config_instance = SolarCliConfig(config_dir)

    return _config_instance


def get_relay_config() -> RelayConfig:
    """Get relay configuration"""
    return get_config().relay
