"""
Test configuration and fixtures for solar-cli tests
"""

import asyncio
import json
import os

# Keep test output quiet; must be set before solar_cli.config.settings is imported
os.environ.setdefault("SOLARCLI_LOG_LEVEL", "WARNING")

import httpx
import pytest

from solar_cli.config.config_loader import RelayConfig
from solar_cli.crypto.identities import address_from_passphrase
from solar_cli.crypto.networks import TESTNET, NetworkContext

# Test passphrases (for testing only - never use in production)
SENDER_PASSPHRASE = "this is a top secret passphrase"
RECIPIENT_PASSPHRASE = "another top secret passphrase for the recipient"

TEST_NODE_IP = "http://relay.test:6003/api"
TEST_HEIGHT = 1234

VALID_CID_V0 = "QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"
VALID_CID_V1 = "bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


class FakeRelay:
    """
    In-memory relay node served through httpx.MockTransport.

    Records every request, so tests can assert which endpoints were hit
    (and that none were, when input is rejected up front).
    """

    def __init__(self, nonce: int = 0, balance: str = "250000000"):
        self.nonce = nonce
        self.balance = balance
        self.requests = []
        self.posted = []
        self.blockchain_status = 200
        self.wallet_status = 200
        self.broadcast_status = 200
        self.broadcast_body = None

    @property
    def paths(self):
        return [request.url.path for request in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path.endswith("/blockchain"):
            if self.blockchain_status != 200:
                return httpx.Response(self.blockchain_status, json={})
            return httpx.Response(
                200,
                json={"data": {"block": {"height": TEST_HEIGHT}, "supply": "1"}},
            )

        if path.endswith("/node/status"):
            return httpx.Response(
                200,
                json={"data": {"synced": True, "now": TEST_HEIGHT, "blocksCount": 0}},
            )

        if path.endswith("/peers"):
            return httpx.Response(
                200,
                json={
                    "meta": {"count": 1, "page": request.url.params.get("page", "1")},
                    "data": [{"ip": "10.0.0.1", "port": 6002}],
                },
            )

        if "/wallets/" in path:
            if self.wallet_status != 200:
                return httpx.Response(self.wallet_status, json={"error": "Not Found"})
            address = path.rsplit("/", 1)[-1]
            return httpx.Response(
                200,
                json={
                    "data": {
                        "address": address,
                        "nonce": str(self.nonce),
                        "balance": self.balance,
                    }
                },
            )

        if path.endswith("/transactions") and request.method == "POST":
            payload = json.loads(request.content)
            self.posted.extend(payload["transactions"])
            if self.broadcast_status != 200:
                return httpx.Response(self.broadcast_status, json={})
            if self.broadcast_body is not None:
                return httpx.Response(200, json=self.broadcast_body)
            ids = [tx["id"] for tx in payload["transactions"]]
            return httpx.Response(
                200, json={"data": {"accept": ids, "broadcast": ids, "invalid": []}}
            )

        return httpx.Response(404, json={"error": "Not Found"})


@pytest.fixture
def fake_relay():
    """Relay with a fresh wallet (nonce 0) that accepts every transaction."""
    return FakeRelay()


@pytest.fixture
def make_relay():
    """Factory for relays with a given wallet nonce and balance."""
    return FakeRelay


@pytest.fixture
def relay_config():
    return RelayConfig(network="testnet", node_ip=TEST_NODE_IP)


@pytest.fixture
def testnet_context():
    return NetworkContext(network=TESTNET, height=TEST_HEIGHT)


@pytest.fixture
def sender_passphrase():
    return SENDER_PASSPHRASE


@pytest.fixture
def recipient_passphrase():
    return RECIPIENT_PASSPHRASE


@pytest.fixture(params=[VALID_CID_V0, VALID_CID_V1], ids=["cidv0", "cidv1"])
def valid_cid(request):
    return request.param


@pytest.fixture
def sender_address():
    return address_from_passphrase(SENDER_PASSPHRASE, TESTNET)


@pytest.fixture
def recipient_address():
    return address_from_passphrase(RECIPIENT_PASSPHRASE, TESTNET)


# Mark all async tests
def pytest_collection_modifyitems(config, items):
    """Automatically mark async tests"""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
