"""
Shared state for CLI commands and the relay bootstrapping every relay
command goes through.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

import click
import httpx

from ..config.config_loader import RelayConfig, get_relay_config
from ..config.settings import logger
from ..crypto.networks import Network, NetworkContext, get_network
from ..relay.client import RelayClient
from ..relay.connector import RelayConnector
from ..service.errors import RelayConnectionError, SolarCliError
from .output import OutputFormatter

RelayHandler = Callable[[RelayClient, NetworkContext], Awaitable[Any]]


@dataclass
class CliContext:
    """Carried in ``click.Context.obj``; tests replace the transport."""

    relay_config: RelayConfig = field(default_factory=get_relay_config)
    output: OutputFormatter = field(default_factory=OutputFormatter)
    transport: Optional[httpx.AsyncBaseTransport] = None

    @property
    def network(self) -> Network:
        return get_network(self.relay_config.network)

    def relay_client(self) -> RelayClient:
        return RelayClient(self.relay_config.node_ip, transport=self.transport)


def fail(cli_ctx: CliContext, message: str) -> None:
    """Report an error and end the command with exit code 1."""
    cli_ctx.output.error(message)
    click.get_current_context().exit(1)


def run_with_relay(cli_ctx: CliContext, handler: RelayHandler) -> Any:
    """
    Connect to the relay, then run ``handler(client, context)``.

    The connect outcome is awaited and checked before the handler issues any
    relay call. SolarCliError from either step is reported and ends the
    command with exit code 1.
    """
    out = cli_ctx.output
    config = cli_ctx.relay_config

    async def runner():
        async with cli_ctx.relay_client() as client:
            out.info(f"Opening {config.network} connection to relay: {config.node_ip}")
            connector = RelayConnector(config, client)
            if not await connector.connect():
                if connector.last_error is not None:
                    out.error(str(connector.last_error))
                raise RelayConnectionError("Cannot connect to relay node")
            return await handler(client, connector.context)

    try:
        return asyncio.run(runner())
    except SolarCliError as e:
        logger.debug(f"Command failed: {e!r}")
        fail(cli_ctx, str(e))
