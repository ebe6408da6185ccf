# solar_cli/cli/message_cli.py
import click

from ..service.message_service import sign_message, verify_message
from .context import CliContext, fail


@click.command("sign")
@click.option("--msg", required=True, help="Message to be signed")
@click.option("--passphrase", required=True, help="Your Private Passphrase (12 words)")
@click.pass_obj
def sign_cmd(cli_ctx: CliContext, msg, passphrase):
    """
    ✍️  Sign message using Schnorr algorithm.
    """
    out = cli_ctx.output
    out.info("Signing message")
    out.result_json(sign_message(msg, passphrase))


@click.command("verify")
@click.option("--msg", required=True, help="Message that was signed")
@click.option(
    "--publicKey", "--public-key", "public_key", required=True, help="Public key of sender"
)
@click.option("--signature", required=True, help="Message Signature")
@click.pass_obj
def verify_cmd(cli_ctx: CliContext, msg, public_key, signature):
    """
    🔍 Verify Signature using Schnorr algorithm.

    Exits with status 1 when the signature does not match.
    """
    out = cli_ctx.output
    out.info("Verifying message")
    if verify_message(msg, public_key, signature):
        out.result("Signature is verified")
    else:
        fail(cli_ctx, "Signature is invalid")
