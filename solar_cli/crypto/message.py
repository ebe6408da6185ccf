"""
Message hashing and BIP-340 Schnorr signatures over secp256k1.
"""

import hashlib
from typing import Union

from coincurve import PrivateKey, PublicKey, PublicKeyXOnly

from .identities import KeyPair


def sha256(message: Union[str, bytes]) -> bytes:
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hashlib.sha256(message).digest()


def sign_schnorr(digest: bytes, keys: KeyPair) -> str:
    """Sign a 32 byte digest, returning the 64 byte signature as hex."""
    if len(digest) != 32:
        raise ValueError(f"Schnorr signing requires a 32-byte digest, got {len(digest)}")
    return PrivateKey(keys.private_key).sign_schnorr(digest).hex()


def verify_schnorr(digest: bytes, signature: str, public_key: str) -> bool:
    """
    Verify a hex signature against a hex public key.

    The public key may be given compressed (33 bytes) or x-only (32 bytes).
    Anything that does not parse verifies as False.
    """
    try:
        signature_bytes = bytes.fromhex(signature)
        key_bytes = bytes.fromhex(public_key)
        if len(signature_bytes) != 64 or len(digest) != 32:
            return False
        if len(key_bytes) == 33:
            key_bytes = PublicKey(key_bytes).format(compressed=True)[1:]
        if len(key_bytes) != 32:
            return False
        return PublicKeyXOnly(key_bytes).verify(signature_bytes, digest)
    except ValueError:
        return False
