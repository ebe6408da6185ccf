"""
Network presets for the Solar blockchain.

A preset only carries the constants needed to derive addresses and to stamp
transactions with the right network byte. The chain height reported by the
relay travels alongside it in a NetworkContext.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Network:
    name: str
    pub_key_hash: int
    wif: int
    token: str
    symbol: str


MAINNET = Network(name="mainnet", pub_key_hash=63, wif=252, token="SXP", symbol="SXP")
TESTNET = Network(name="testnet", pub_key_hash=30, wif=186, token="tSXP", symbol="tSXP")

NETWORKS: Dict[str, Network] = {
    MAINNET.name: MAINNET,
    TESTNET.name: TESTNET,
}


@dataclass(frozen=True)
class NetworkContext:
    """Active network preset plus the chain height last reported by the relay."""

    network: Network
    height: int = 1


def get_network(name: str) -> Network:
    """Look up a preset by name ("mainnet" or "testnet")."""
    try:
        return NETWORKS[name.lower()]
    except KeyError:
        raise ValueError(f"Unsupported network preset: {name}") from None
