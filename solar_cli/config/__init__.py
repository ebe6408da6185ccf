from .config_loader import (
    ConfigError,
    RelayConfig,
    SolarCliConfig,
    get_config,
    get_relay_config,
)

__all__ = [
    "ConfigError",
    "RelayConfig",
    "SolarCliConfig",
    "get_config",
    "get_relay_config",
]
