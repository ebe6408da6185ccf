from .client import RelayClient
from .connector import RelayConnector

__all__ = ["RelayClient", "RelayConnector"]
