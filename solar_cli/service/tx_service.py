# solar_cli/service/tx_service.py
"""
Transaction submission workflow.

Every submission follows the same sequence:

  1. derive the sender address from the passphrase
  2. fetch the sender wallet from the relay and take nonce + 1
  3. build and sign the transaction
  4. POST it to the relay as a single element batch
  5. interpret the relay's accept / invalid answer

A failed nonce fetch aborts the submission; the workflow never signs with a
guessed nonce.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx

from ..config.settings import logger
from ..crypto.identities import address_from_passphrase
from ..crypto.networks import NetworkContext
from ..crypto.transactions import (
    BuilderFactory,
    Transaction,
    TransactionBuilder,
    TransactionBuildError,
)
from ..relay.client import RelayClient
from .validation import require_ipfs_cid
from .errors import (
    BroadcastError,
    InvalidInputError,
    NonceFetchError,
    RelayConnectionError,
)
from .query_service import get_nonce


@dataclass(frozen=True)
class BroadcastResult:
    """Outcome of one broadcast, as reported by the relay."""

    status_code: int
    transaction_id: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.transaction_id is not None


def interpret_broadcast_response(status_code: int, body: Any) -> BroadcastResult:
    """
    Turn a transactions POST response into a BroadcastResult.

    - 200 with a non-empty ``data.accept`` → the first accepted id
    - 200 with an empty ``accept`` → the message the relay attached to the
      first ``data.invalid`` id
    - anything else → failure carrying the status code
    """
    if status_code != 200:
        return BroadcastResult(
            status_code=status_code,
            error_message=f"Error sending. Status code: {status_code}",
        )

    try:
        data = body["data"]
        accept = data.get("accept") or []
        if accept:
            return BroadcastResult(status_code=status_code, transaction_id=accept[0])

        invalid = data.get("invalid") or []
        if not invalid:
            return BroadcastResult(
                status_code=status_code,
                error_message="Relay accepted no transaction and reported no error",
            )
        invalid_id = invalid[0]
        message = body["errors"][invalid_id]["message"]
    except (KeyError, TypeError, AttributeError, IndexError):
        logger.debug(f"Unexpected broadcast response body: {body!r}")
        return BroadcastResult(
            status_code=status_code,
            error_message="Relay returned a malformed broadcast response",
        )
    return BroadcastResult(status_code=status_code, error_message=message)


class TransactionWorkflow:
    """
    Builds, signs and broadcasts transactions against one relay.

    Nonces issued by this instance are remembered per sender, so submitting
    twice before the relay has confirmed the first transaction still yields
    distinct nonces. Nothing is persisted beyond the instance.
    """

    def __init__(self, client: RelayClient, context: NetworkContext):
        self.client = client
        self.context = context
        self._issued_nonces: Dict[str, int] = {}

    async def next_nonce(self, address: str) -> int:
        try:
            current = await get_nonce(self.client, address)
        except RelayConnectionError as e:
            raise NonceFetchError(f"Cannot retrieve nonce for {address}: {e}") from e

        nonce = current + 1
        issued = self._issued_nonces.get(address)
        if issued is not None and issued >= nonce:
            nonce = issued + 1
        logger.debug(f"Wallet {address} nonce {current}, using {nonce}")
        return nonce

    async def submit_transfer(
        self,
        passphrase: str,
        recipient: str,
        amount: int,
        fee: int,
        memo: Optional[str] = None,
    ) -> BroadcastResult:
        def build(builder_nonce: int) -> TransactionBuilder:
            return (
                BuilderFactory.transfer(self.context)
                .nonce(builder_nonce)
                .recipient_id(recipient)
                .amount(amount)
                .fee(fee)
            )

        return await self._submit(passphrase, build, memo)

    async def submit_ipfs(
        self,
        passphrase: str,
        ipfs_hash: str,
        fee: int,
        memo: Optional[str] = None,
    ) -> BroadcastResult:
        require_ipfs_cid(ipfs_hash)

        def build(builder_nonce: int) -> TransactionBuilder:
            return (
                BuilderFactory.ipfs(self.context)
                .nonce(builder_nonce)
                .ipfs_asset(ipfs_hash)
                .fee(fee)
            )

        return await self._submit(passphrase, build, memo)

    async def submit_vote(
        self,
        passphrase: str,
        votes: Mapping[str, float],
        fee: int,
        memo: Optional[str] = None,
    ) -> BroadcastResult:
        def build(builder_nonce: int) -> TransactionBuilder:
            return (
                BuilderFactory.vote(self.context)
                .nonce(builder_nonce)
                .votes_asset(votes)
                .fee(fee)
            )

        return await self._submit(passphrase, build, memo)

    async def _submit(self, passphrase, build, memo: Optional[str]) -> BroadcastResult:
        sender = address_from_passphrase(passphrase, self.context.network)

        # Step 1: nonce of the sender wallet, incremented
        nonce = await self.next_nonce(sender)

        # Step 2: build and sign
        try:
            builder = build(nonce)
            if memo is not None:
                builder.memo(memo)
            transaction = builder.sign(passphrase).build()
        except TransactionBuildError as e:
            raise InvalidInputError(str(e)) from e
        self._issued_nonces[sender] = transaction.nonce

        # Step 3: broadcast
        return await self.broadcast(transaction)

    async def broadcast(self, transaction: Transaction) -> BroadcastResult:
        logger.info(f"Sending transaction {transaction.id} (nonce {transaction.nonce})")
        try:
            response = await self.client.create_transactions([transaction.to_json()])
        except httpx.HTTPError as e:
            logger.error(f"Error broadcasting transaction {transaction.id}: {e}")
            raise RelayConnectionError(f"Cannot broadcast transaction: {e}") from e

        body = None
        if response.status_code == 200:
            try:
                body = response.json()
            except ValueError:
                body = None
        result = interpret_broadcast_response(response.status_code, body)
        if result.accepted:
            logger.info(f"Transaction accepted: {result.transaction_id}")
        else:
            logger.warning(f"Transaction not accepted: {result.error_message}")
        return result


def raise_for_result(result: BroadcastResult) -> str:
    """Return the accepted transaction id or raise BroadcastError."""
    if not result.accepted:
        message = result.error_message
        if result.status_code == 200:
            message = f"Error Message: {message}"
        raise BroadcastError(message, status_code=result.status_code)
    return result.transaction_id
