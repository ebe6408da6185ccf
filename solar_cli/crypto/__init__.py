"""
Crypto primitives used by solar-cli: network presets, identities, message
signing and transaction building. Nothing here talks to the network.
"""

from .identities import (
    KeyPair,
    address_from_passphrase,
    address_from_public_key,
    keys_from_passphrase,
    public_key_from_passphrase,
    validate_address,
)
from .message import sha256, sign_schnorr, verify_schnorr
from .networks import MAINNET, NETWORKS, TESTNET, Network, NetworkContext, get_network
from .transactions import BuilderFactory, Transaction, TransactionBuildError

__all__ = [
    "KeyPair",
    "address_from_passphrase",
    "address_from_public_key",
    "keys_from_passphrase",
    "public_key_from_passphrase",
    "validate_address",
    "sha256",
    "sign_schnorr",
    "verify_schnorr",
    "MAINNET",
    "NETWORKS",
    "TESTNET",
    "Network",
    "NetworkContext",
    "get_network",
    "BuilderFactory",
    "Transaction",
    "TransactionBuildError",
]
