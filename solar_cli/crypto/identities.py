"""
Key and address derivation.

Keys are derived from a BIP39-style passphrase the way the Solar SDK does it:
the private key is SHA256(passphrase) and the public key is the compressed
secp256k1 point. An address is
Base58Check(pub_key_hash || RIPEMD160(public key)), with no SHA256 step.
"""

import hashlib
from dataclasses import dataclass
from typing import Optional

from bip_utils import Base58ChecksumError, Base58Decoder, Base58Encoder
from coincurve import PrivateKey
from Crypto.Hash import RIPEMD160

from .networks import Network

ADDRESS_PAYLOAD_LENGTH = 21


@dataclass(frozen=True)
class KeyPair:
    private_key: bytes
    public_key: str  # compressed, hex encoded

    @property
    def private_key_hex(self) -> str:
        return self.private_key.hex()


def keys_from_passphrase(passphrase: str) -> KeyPair:
    """Derive the secp256k1 key pair for a passphrase."""
    secret = hashlib.sha256(passphrase.encode("utf-8")).digest()
    private_key = PrivateKey(secret)
    return KeyPair(
        private_key=private_key.secret,
        public_key=private_key.public_key.format(compressed=True).hex(),
    )


def public_key_from_passphrase(passphrase: str) -> str:
    return keys_from_passphrase(passphrase).public_key


def address_from_public_key(public_key: str, network: Network) -> str:
    payload = bytes([network.pub_key_hash]) + RIPEMD160.new(bytes.fromhex(public_key)).digest()
    return Base58Encoder.CheckEncode(payload)


def address_from_passphrase(passphrase: str, network: Network) -> str:
    return address_from_public_key(public_key_from_passphrase(passphrase), network)


def decode_address(address: str) -> Optional[bytes]:
    """Return the 21 byte address payload, or None if it does not decode."""
    try:
        payload = Base58Decoder.CheckDecode(address)
    except (ValueError, Base58ChecksumError):
        return None
    if len(payload) != ADDRESS_PAYLOAD_LENGTH:
        return None
    return payload


def validate_address(address: str, network: Network) -> bool:
    """Check that ``address`` is a well formed address for ``network``."""
    if not isinstance(address, str) or not address:
        return False
    payload = decode_address(address)
    return payload is not None and payload[0] == network.pub_key_hash
