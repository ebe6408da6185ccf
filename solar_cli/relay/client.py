"""
Async HTTP client for the relay node API.
Wraps httpx.AsyncClient around the endpoints the CLI needs.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config.settings import settings

logger = logging.getLogger(__name__)


class RelayClient:
    """Async client for a relay node's public API"""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout if timeout is not None else settings.HTTP_CLIENT_TIMEOUT
        self.transport = transport
        self.session: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        """Async context manager entry"""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def open(self):
        if not self.session:
            self.session = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
                headers={"Content-Type": "application/json"},
            )
            logger.debug(f"Relay client opened for {self.base_url}")

    async def close(self):
        if self.session:
            await self.session.aclose()
            self.session = None
            logger.debug("Relay client closed")

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.session:
            await self.open()
        response = await self.session.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def get_blockchain(self) -> Dict[str, Any]:
        """GET blockchain: current block and supply"""
        return await self._get("blockchain")

    async def node_status(self) -> Dict[str, Any]:
        """GET node/status"""
        return await self._get("node/status")

    async def peers(self, page: Optional[int] = None) -> Dict[str, Any]:
        """GET peers, optionally a single page"""
        params = {"page": page} if page is not None else None
        return await self._get("peers", params=params)

    async def wallet(self, address: str) -> Dict[str, Any]:
        """GET wallets/{address}"""
        return await self._get(f"wallets/{address}")

    async def create_transactions(self, transactions: List[Dict[str, Any]]) -> httpx.Response:
        """
        POST transactions.

        The raw response is returned so callers can tell an accepted batch
        from a rejected one by status code and body.
        """
        if not self.session:
            await self.open()
        return await self.session.post("transactions", json={"transactions": transactions})
