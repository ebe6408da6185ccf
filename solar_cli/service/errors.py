"""
Error types for solar-cli operations.
Every failure is terminal for the current command; nothing is retried.
"""

from typing import Optional


class SolarCliError(Exception):
    """Base class for errors reported to the operator"""

    pass


class RelayConnectionError(SolarCliError):
    """Relay unreachable or returned a malformed response"""

    pass


class NonceFetchError(RelayConnectionError):
    """The sender wallet (and therefore its nonce) could not be fetched"""

    pass


class InvalidInputError(SolarCliError):
    """Command input rejected before any network call"""

    pass


class BroadcastError(SolarCliError):
    """The relay did not accept a submitted transaction"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
