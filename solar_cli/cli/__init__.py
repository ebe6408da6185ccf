from .main import main, solar_cli

__all__ = ["main", "solar_cli"]
