"""solar-cli: query a Solar relay node and sign and broadcast transactions."""

__version__ = "1.0.0"
