# solar_cli/service/message_service.py

from typing import Dict

from ..crypto.identities import keys_from_passphrase
from ..crypto.message import sha256, sign_schnorr, verify_schnorr


def sign_message(message: str, passphrase: str) -> Dict[str, str]:
    """
    Sign a message with the key pair derived from a passphrase.

    Args:
        message (str): Text to sign; its SHA256 digest is what gets signed.
        passphrase (str): The signer's passphrase.

    Returns:
        Dict: {"message": ..., "signature": <hex>, "publicKey": <compressed hex>}
    """
    keys = keys_from_passphrase(passphrase)
    signature = sign_schnorr(sha256(message), keys)
    return {
        "message": message,
        "signature": signature,
        "publicKey": keys.public_key,
    }


def verify_message(message: str, public_key: str, signature: str) -> bool:
    """Check a Schnorr signature over SHA256(message)."""
    return verify_schnorr(sha256(message), signature, public_key)
