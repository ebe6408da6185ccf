# file: solar_cli/cli/tx_cli.py
"""
Commands that build, sign and broadcast transactions.

Input is checked before the relay is contacted; the relay connection is
checked before the sender nonce is fetched.
"""

import click

from ..service.validation import (
    parse_vote_asset,
    require_ipfs_cid,
    require_memo,
    validate_address,
)
from ..crypto.transactions import MAX_UINT64
from ..service.errors import InvalidInputError
from ..service.tx_service import TransactionWorkflow, raise_for_result
from .context import CliContext, fail, run_with_relay

passphrase_option = click.option(
    "--passphrase", required=True, help="Your Private Passphrase (12 words)"
)
fee_option = click.option(
    "--fee",
    required=True,
    type=click.IntRange(min=0, max=MAX_UINT64),
    help="Transaction Fee (in 10^-8 units)",
)
memo_option = click.option(
    "--memo",
    default=None,
    help="Message to include with transaction (optional)",
)


def _check_input(cli_ctx: CliContext, check, value):
    """Apply an input gate; a rejection ends the command before any relay call."""
    try:
        return check(value)
    except InvalidInputError as e:
        fail(cli_ctx, str(e))


def _broadcast(cli_ctx: CliContext, submit):
    """Run ``submit(workflow)`` against a connected relay and print the outcome."""
    out = cli_ctx.output

    async def send(client, context):
        workflow = TransactionWorkflow(client, context)
        out.info("Sending transaction...")
        result = await submit(workflow)
        transaction_id = raise_for_result(result)
        out.result(f"Transaction ID: {transaction_id}")

    run_with_relay(cli_ctx, send)


# ------------------------------------------------------------------------------
# SEND TRANSFER
# ------------------------------------------------------------------------------
@click.command("tx")
@click.option("--adr", required=True, help="Recipient's Address")
@click.option(
    "--amt",
    required=True,
    type=click.IntRange(min=1, max=MAX_UINT64),
    help="Amount of coins to send (in 10^-8 units)",
)
@fee_option
@passphrase_option
@memo_option
@click.pass_obj
def tx_cmd(cli_ctx: CliContext, adr, amt, fee, passphrase, memo):
    """
    💸 Send transaction with optional Memo message.
    """
    if not validate_address(adr, cli_ctx.network):
        fail(cli_ctx, f"Not a valid {cli_ctx.network.name} address: {adr}")
    _check_input(cli_ctx, require_memo, memo)

    _broadcast(
        cli_ctx,
        lambda workflow: workflow.submit_transfer(
            passphrase, recipient=adr, amount=amt, fee=fee, memo=memo
        ),
    )


# ------------------------------------------------------------------------------
# SEND IPFS TRANSACTION
# ------------------------------------------------------------------------------
@click.command("tx-ipfs")
@click.option("--hash", "ipfs_hash", required=True, help="IPFS Hash")
@fee_option
@passphrase_option
@memo_option
@click.pass_obj
def tx_ipfs_cmd(cli_ctx: CliContext, ipfs_hash, fee, passphrase, memo):
    """
    📦 Send IPFS transaction with optional Memo message.
    """
    _check_input(cli_ctx, require_ipfs_cid, ipfs_hash)
    _check_input(cli_ctx, require_memo, memo)

    _broadcast(
        cli_ctx,
        lambda workflow: workflow.submit_ipfs(
            passphrase, ipfs_hash=ipfs_hash, fee=fee, memo=memo
        ),
    )


# ------------------------------------------------------------------------------
# SEND VOTE
# ------------------------------------------------------------------------------
@click.command("vote")
@click.option(
    "--delegate",
    required=True,
    help="""JSON object of delegate votes, e.g. '{"name": 60, "other": 40}', """
    "or a path to a file containing it. Use '{}' to cancel votes.",
)
@fee_option
@passphrase_option
@memo_option
@click.pass_obj
def vote_cmd(cli_ctx: CliContext, delegate, fee, passphrase, memo):
    """
    🗳️  Send a vote transaction.
    """
    votes = _check_input(cli_ctx, parse_vote_asset, delegate)
    _check_input(cli_ctx, require_memo, memo)

    cli_ctx.output.info(f"Votes: {votes}" if votes else "Cancelling all votes")
    _broadcast(
        cli_ctx,
        lambda workflow: workflow.submit_vote(passphrase, votes=votes, fee=fee, memo=memo),
    )
