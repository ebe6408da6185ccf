import json
import math
import os
import re
from typing import Dict, Optional

from multiformats import CID

from ..config.settings import logger
from ..crypto.identities import validate_address as _validate_address
from ..crypto.networks import Network
from ..crypto.transactions import MAX_MEMO_BYTES
from .errors import InvalidInputError

MAX_VOTES = 53
# Delegate usernames: 1 to 20 lowercase letters, digits or !@$&_.
DELEGATE_NAME_REGEX = re.compile(r"^[a-z0-9!@$&_.]{1,20}$")


def validate_address(address: str, network: Network) -> bool:
    """
    Validates that a string is a properly formatted wallet address for the network

    Args:
        address: The address to validate
        network: Network preset whose address version byte must match

    Returns:
        Boolean indicating if the address is valid
    """
    return _validate_address(address, network)


def is_ipfs_cid(value: str) -> bool:
    """True if ``value`` decodes as an IPFS content identifier (v0 or v1)."""
    if not value or not isinstance(value, str):
        return False
    try:
        CID.decode(value)
    except (ValueError, KeyError, TypeError, IndexError):
        return False
    return True


def require_ipfs_cid(value: str) -> str:
    if not is_ipfs_cid(value):
        raise InvalidInputError(f"Not a valid IPFS hash: {value}")
    return value


def require_memo(memo: Optional[str]) -> Optional[str]:
    """Memos are optional but limited to MAX_MEMO_BYTES of UTF-8."""
    if memo is not None and len(memo.encode("utf-8")) > MAX_MEMO_BYTES:
        raise InvalidInputError(f"Memo exceeds {MAX_MEMO_BYTES} bytes")
    return memo


def _reject_duplicate_names(pairs):
    names = [name for name, _ in pairs]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise InvalidInputError(f"Delegate listed more than once: {', '.join(duplicates)}")
    return dict(pairs)


def parse_vote_asset(value: str) -> Dict[str, float]:
    """
    Parse a vote asset given as a JSON object or as a path to a JSON file.

    The object maps delegate usernames to percentages. Percentages must be
    in [0, 100], have at most two decimals and sum to 100. An empty object
    cancels all votes.
    """
    text = value
    if os.path.isfile(value):
        logger.debug(f"Reading vote asset from {value}")
        try:
            with open(value, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidInputError(f"Cannot read delegate votes from {value}: {e}") from e

    try:
        votes = json.loads(text, object_pairs_hook=_reject_duplicate_names)
    except json.JSONDecodeError as e:
        raise InvalidInputError(
            f"Delegate votes must be a JSON object such as '{{\"name\": 100}}': {e.msg}"
        ) from e

    if not isinstance(votes, dict):
        raise InvalidInputError("Delegate votes must be a JSON object")
    if len(votes) > MAX_VOTES:
        raise InvalidInputError(f"At most {MAX_VOTES} delegates can be voted for")

    total = 0.0
    for name, percent in votes.items():
        if not name:
            raise InvalidInputError("Delegate name must not be empty")
        if not DELEGATE_NAME_REGEX.fullmatch(name):
            raise InvalidInputError(f"Invalid delegate name: {name}")
        if isinstance(percent, bool) or not isinstance(percent, (int, float)):
            raise InvalidInputError(f"Vote percentage for '{name}' must be a number")
        if not 0 <= percent <= 100:
            raise InvalidInputError(f"Vote percentage for '{name}' must be between 0 and 100")
        if not math.isclose(round(percent, 2), percent, abs_tol=1e-9):
            raise InvalidInputError(
                f"Vote percentage for '{name}' has more than two decimal places"
            )
        total += percent

    if votes and not math.isclose(total, 100.0, abs_tol=1e-6):
        raise InvalidInputError(f"Vote percentages must add up to 100, got {total:g}")

    return votes
