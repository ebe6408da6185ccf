#!/usr/bin/env python3
# solar_cli/cli/main.py

import sys

import click

from .. import __version__
from ..config.config_loader import ConfigError
from ..config.settings import logger
from .context import CliContext
from .message_cli import sign_cmd, verify_cmd
from .output import OutputFormatter
from .query_cli import balance_cmd, nonce_cmd, peers_cmd, relay_cmd, validate_cmd
from .tx_cli import tx_cmd, tx_ipfs_cmd, vote_cmd


class StrictGroup(click.Group):
    """Group that answers an unknown command with the help listing."""

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if (
            cmd_name is not None
            and not ctx.resilient_parsing
            and self.get_command(ctx, cmd_name) is None
        ):
            click.echo(f"Unknown command: {cmd_name}\n", err=True)
            click.echo(ctx.get_help())
            ctx.exit(2)
        return super().resolve_command(ctx, args)


@click.group(cls=StrictGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="solar-cli")
@click.pass_context
def solar_cli(ctx):
    """
    ☀️  solar-cli - query a Solar relay node and send signed transactions.

    The relay node and network are set in the package configuration
    (solar_cli/config/relay.yaml).
    """
    ctx.ensure_object(CliContext)


solar_cli.add_command(relay_cmd)
solar_cli.add_command(validate_cmd)
solar_cli.add_command(peers_cmd)
solar_cli.add_command(nonce_cmd)
solar_cli.add_command(balance_cmd)
solar_cli.add_command(sign_cmd)
solar_cli.add_command(verify_cmd)
solar_cli.add_command(tx_cmd)
solar_cli.add_command(tx_ipfs_cmd)
solar_cli.add_command(vote_cmd)


def main():
    """Console script entry point."""
    try:
        solar_cli(prog_name="solar-cli")
    except ConfigError as e:
        OutputFormatter().error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        OutputFormatter().error(f"Unexpected error: {e}")
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
