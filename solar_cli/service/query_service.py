# solar_cli/service/query_service.py

from decimal import Decimal
from typing import Any, Dict, Optional

import httpx

from ..config.settings import logger
from ..relay.client import RelayClient
from .errors import RelayConnectionError

ARKTOSHI = 10**8


async def get_node_status(client: RelayClient) -> Dict[str, Any]:
    """Return the ``data`` section of the relay's node/status response."""
    try:
        response = await client.node_status()
        return response["data"]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Error fetching node status: {e}")
        raise RelayConnectionError(f"Cannot retrieve node status: {e}") from e


async def get_peers(client: RelayClient, page: Optional[int] = None) -> Dict[str, Any]:
    """Return the full peers response body (meta + data) for one page."""
    try:
        return await client.peers(page=page)
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Error fetching peers: {e}")
        raise RelayConnectionError(f"Cannot retrieve peer list: {e}") from e


async def get_wallet(client: RelayClient, address: str) -> Dict[str, Any]:
    """
    Retrieve the wallet state of an address from the relay.

    Args:
        client (RelayClient): An open relay client
        address (str): Wallet address

    Returns:
        Dict: the ``data`` section of wallets/{address}, which carries at
              least "address", "nonce" and "balance".
    """
    try:
        response = await client.wallet(address)
        return response["data"]
    except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
        logger.error(f"Error fetching wallet {address}: {e}")
        raise RelayConnectionError(f"Cannot retrieve wallet {address}: {e}") from e


async def get_nonce(client: RelayClient, address: str) -> int:
    wallet = await get_wallet(client, address)
    try:
        return int(wallet["nonce"])
    except (KeyError, TypeError, ValueError) as e:
        raise RelayConnectionError(f"Cannot retrieve nonce for {address}: {e}") from e


async def get_balance(client: RelayClient, address: str) -> Decimal:
    """Wallet balance in whole coins (relay reports it in 10^-8 units)."""
    wallet = await get_wallet(client, address)
    try:
        return Decimal(str(wallet["balance"])) / ARKTOSHI
    except (KeyError, ArithmeticError) as e:
        raise RelayConnectionError(f"Cannot retrieve balance for {address}: {e}") from e
