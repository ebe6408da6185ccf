"""
Relay connector: selects the network preset and learns the chain height
from the configured relay before any other relay call is made.
"""

import logging
from typing import Optional

import httpx

from ..config.config_loader import RelayConfig
from ..crypto.networks import NetworkContext, get_network
from .client import RelayClient

logger = logging.getLogger(__name__)


class RelayConnector:
    """
    Holds the relay client handle and the network context for one process.

    Construct it with an explicit RelayConfig; nothing is read from or written
    to module level state. ``connect()`` must be awaited and its result checked
    before using ``context`` or issuing further relay calls.
    """

    def __init__(self, config: RelayConfig, client: RelayClient):
        self.config = config
        self.client = client
        self.network = get_network(config.network)
        self._context: Optional[NetworkContext] = None
        self.last_error: Optional[Exception] = None

    @property
    def connected(self) -> bool:
        return self._context is not None

    @property
    def context(self) -> NetworkContext:
        if self._context is None:
            raise RuntimeError("RelayConnector.connect() has not succeeded")
        return self._context

    async def connect(self) -> bool:
        """Fetch the chain height from the relay. Returns False on any failure."""
        logger.info(f"Opening {self.network.name} connection to relay: {self.config.node_ip}")
        self._context = None
        self.last_error = None
        try:
            blockchain = await self.client.get_blockchain()
            height = int(blockchain["data"]["block"]["height"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.error(f"Cannot connect to relay node {self.config.node_ip}: {e}")
            self.last_error = e
            return False

        self._context = NetworkContext(network=self.network, height=height)
        logger.debug(f"Relay reports height {height}")
        return True
