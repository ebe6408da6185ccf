# solar_cli/cli/query_cli.py
"""
Commands that read chain state from the relay, plus offline address validation.
"""

import click

from ..service.validation import validate_address
from ..service.query_service import get_balance, get_node_status, get_nonce, get_peers
from .context import CliContext, run_with_relay


@click.command("relay")
@click.pass_obj
def relay_cmd(cli_ctx: CliContext):
    """
    📡 Get status of relay node used for accessing blockchain.
    """
    out = cli_ctx.output
    out.info("Retrieving relay node status")

    async def show_status(client, context):
        status = await get_node_status(client)
        out.result_json(status)

    run_with_relay(cli_ctx, show_status)


@click.command("validate")
@click.option("--adr", required=True, help="Address")
@click.pass_obj
def validate_cmd(cli_ctx: CliContext, adr):
    """
    ✅ Validate a wallet address.

    Runs offline against the configured network preset.
    """
    out = cli_ctx.output
    out.info(f"Validating address: {adr}")
    if validate_address(adr, cli_ctx.network):
        out.result("Address is valid")
    else:
        out.result("Address is not valid")


@click.command("peers")
@click.option("--page", type=click.IntRange(min=1), default=None, help="Page number")
@click.pass_obj
def peers_cmd(cli_ctx: CliContext, page):
    """
    🌐 Get list of peers.
    """
    out = cli_ctx.output
    out.info("Retrieving Peers")

    async def show_peers(client, context):
        peers = await get_peers(client, page=page)
        out.result_json(peers)

    run_with_relay(cli_ctx, show_peers)


@click.command("nonce")
@click.option("--adr", required=True, help="Address")
@click.pass_obj
def nonce_cmd(cli_ctx: CliContext, adr):
    """
    🔢 Get nonce of wallet.
    """
    out = cli_ctx.output
    out.info(f"Retrieving Nonce from wallet {adr}")

    async def show_nonce(client, context):
        nonce = await get_nonce(client, adr)
        out.result(f"Nonce: {nonce}")

    run_with_relay(cli_ctx, show_nonce)


@click.command("balance")
@click.option("--adr", required=True, help="Address")
@click.pass_obj
def balance_cmd(cli_ctx: CliContext, adr):
    """
    💰 Get balance of wallet.
    """
    out = cli_ctx.output
    out.info(f"Retrieving Balance from wallet {adr}")

    async def show_balance(client, context):
        balance = await get_balance(client, adr)
        out.result(f"Balance: {balance} {context.network.symbol}")

    run_with_relay(cli_ctx, show_balance)
