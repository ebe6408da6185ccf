# tests/cli/test_cli_commands.py

import json

import pytest
from click.testing import CliRunner

from solar_cli.cli.context import CliContext
from solar_cli.cli.main import solar_cli
from solar_cli.crypto.identities import public_key_from_passphrase
from solar_cli.service.message_service import sign_message

TX_ID = "b" * 64

# -------------------------------------------------------------------
# FIXTURES
# -------------------------------------------------------------------


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, relay_config, fake_relay):
    """Run the CLI against the fake relay."""

    def _invoke(*args, relay=None):
        relay = relay or fake_relay
        obj = CliContext(relay_config=relay_config, transport=relay.transport())
        return runner.invoke(solar_cli, list(args), obj=obj)

    return _invoke


# -------------------------------------------------------------------
# GROUP
# -------------------------------------------------------------------


def test_help_lists_commands(invoke):
    result = invoke("--help")
    assert result.exit_code == 0
    for name in ("relay", "validate", "peers", "nonce", "balance", "sign", "verify", "tx", "tx-ipfs", "vote"):
        assert name in result.output


def test_unknown_command_prints_help(invoke):
    result = invoke("transfer")
    assert result.exit_code == 2
    assert "Unknown command: transfer" in result.output
    assert "Usage:" in result.output


def test_missing_required_flag(invoke, fake_relay):
    result = invoke("nonce")
    assert result.exit_code == 2
    assert "--adr" in result.output
    assert fake_relay.requests == []


# -------------------------------------------------------------------
# OFFLINE COMMANDS
# -------------------------------------------------------------------


def test_validate_valid_address(invoke, sender_address, fake_relay):
    result = invoke("validate", "--adr", sender_address)
    assert result.exit_code == 0
    assert "Address is valid" in result.output
    assert fake_relay.requests == []


def test_validate_invalid_address(invoke):
    result = invoke("validate", "--adr", "Dxyz")
    assert result.exit_code == 0
    assert "Address is not valid" in result.output


def test_sign_prints_signature(invoke, sender_passphrase):
    result = invoke("sign", "--msg", "Hello World", "--passphrase", sender_passphrase)
    assert result.exit_code == 0
    assert "Signing message" in result.output
    assert public_key_from_passphrase(sender_passphrase) in result.output
    assert '"signature"' in result.output


def test_verify_valid_signature(invoke, sender_passphrase):
    signed = sign_message("Hello World", sender_passphrase)
    result = invoke(
        "verify",
        "--msg", "Hello World",
        "--publicKey", signed["publicKey"],
        "--signature", signed["signature"],
    )
    assert result.exit_code == 0
    assert "Signature is verified" in result.output


def test_verify_invalid_signature(invoke, sender_passphrase):
    signed = sign_message("Hello World", sender_passphrase)
    result = invoke(
        "verify",
        "--msg", "Goodbye World",
        "--publicKey", signed["publicKey"],
        "--signature", signed["signature"],
    )
    assert result.exit_code == 1
    assert "Signature is invalid" in result.output


# -------------------------------------------------------------------
# QUERY COMMANDS
# -------------------------------------------------------------------


def test_relay_status(invoke):
    result = invoke("relay")
    assert result.exit_code == 0
    assert "Opening testnet connection to relay" in result.output
    assert '"synced": true' in result.output


def test_relay_unreachable(invoke, fake_relay):
    fake_relay.blockchain_status = 503
    result = invoke("relay")
    assert result.exit_code == 1
    assert "Cannot connect to relay node" in result.output
    assert fake_relay.paths == ["/api/blockchain"]


def test_peers_page(invoke, fake_relay):
    result = invoke("peers", "--page", "2")
    assert result.exit_code == 0
    assert "10.0.0.1" in result.output
    assert fake_relay.requests[-1].url.params["page"] == "2"


def test_peers_rejects_page_zero(invoke, fake_relay):
    result = invoke("peers", "--page", "0")
    assert result.exit_code == 2
    assert fake_relay.requests == []


def test_nonce(invoke, make_relay, sender_address):
    result = invoke("nonce", "--adr", sender_address, relay=make_relay(nonce=12))
    assert result.exit_code == 0
    assert "Nonce: 12" in result.output


def test_balance(invoke, sender_address):
    result = invoke("balance", "--adr", sender_address)
    assert result.exit_code == 0
    assert "Balance: 2.5 tSXP" in result.output


def test_balance_unknown_wallet(invoke, fake_relay, sender_address):
    fake_relay.wallet_status = 404
    result = invoke("balance", "--adr", sender_address)
    assert result.exit_code == 1
    assert "Cannot retrieve wallet" in result.output


# -------------------------------------------------------------------
# TRANSACTION COMMANDS
# -------------------------------------------------------------------


def test_tx_success(invoke, fake_relay, sender_passphrase, recipient_address):
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "100000000",
        "--fee", "10000000",
        "--passphrase", sender_passphrase,
        "--memo", "thanks",
    )
    assert result.exit_code == 0, result.output
    assert len(fake_relay.posted) == 1
    posted = fake_relay.posted[0]
    assert posted["memo"] == "thanks"
    assert posted["nonce"] == "1"
    assert f"Transaction ID: {posted['id']}" in result.output


def test_tx_rejected_by_relay(invoke, fake_relay, sender_passphrase, recipient_address):
    fake_relay.broadcast_body = {
        "data": {"accept": [], "broadcast": [], "invalid": [TX_ID]},
        "errors": {TX_ID: {"type": "ERR_APPLY", "message": "Insufficient balance"}},
    }
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "1",
        "--fee", "1",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 1
    assert "Error Message: Insufficient balance" in result.output


def test_tx_relay_error_status(invoke, fake_relay, sender_passphrase, recipient_address):
    fake_relay.broadcast_status = 500
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "1",
        "--fee", "1",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 1
    assert "Error sending. Status code: 500" in result.output


def test_tx_invalid_recipient_makes_no_request(invoke, fake_relay, sender_passphrase):
    result = invoke(
        "tx",
        "--adr", "not-an-address",
        "--amt", "1",
        "--fee", "1",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 1
    assert "Not a valid testnet address" in result.output
    assert fake_relay.requests == []


@pytest.mark.parametrize("amount", ["0", "-1", "ten", str(2**64)])
def test_tx_rejects_bad_amount(invoke, fake_relay, sender_passphrase, recipient_address, amount):
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", amount,
        "--fee", "1",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 2
    assert fake_relay.requests == []


def test_tx_rejects_fee_above_uint64(invoke, fake_relay, sender_passphrase, recipient_address):
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "1",
        "--fee", str(2**64),
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 2
    assert fake_relay.requests == []


def test_tx_memo_too_long(invoke, fake_relay, sender_passphrase, recipient_address):
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "1",
        "--fee", "1",
        "--passphrase", sender_passphrase,
        "--memo", "x" * 256,
    )
    assert result.exit_code == 1
    assert fake_relay.requests == []


def test_tx_nonce_failure_does_not_broadcast(
    invoke, fake_relay, sender_passphrase, recipient_address
):
    fake_relay.wallet_status = 404
    result = invoke(
        "tx",
        "--adr", recipient_address,
        "--amt", "1",
        "--fee", "1",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 1
    assert "Cannot retrieve nonce" in result.output
    assert fake_relay.posted == []


def test_tx_ipfs_success(invoke, fake_relay, sender_passphrase, valid_cid):
    result = invoke(
        "tx-ipfs", "--hash", valid_cid, "--fee", "5000000", "--passphrase", sender_passphrase
    )
    assert result.exit_code == 0, result.output
    assert fake_relay.posted[0]["asset"] == {"ipfs": valid_cid}
    assert "Transaction ID:" in result.output


def test_tx_ipfs_invalid_hash_makes_no_request(invoke, fake_relay, sender_passphrase):
    result = invoke(
        "tx-ipfs", "--hash", "not-a-hash", "--fee", "1", "--passphrase", sender_passphrase
    )
    assert result.exit_code == 1
    assert "Not a valid IPFS hash: not-a-hash" in result.output
    assert fake_relay.requests == []


def test_vote_success(invoke, fake_relay, sender_passphrase):
    votes = {"alice": 60, "bob": 40}
    result = invoke(
        "vote",
        "--delegate", json.dumps(votes),
        "--fee", "9000000",
        "--passphrase", sender_passphrase,
    )
    assert result.exit_code == 0, result.output
    assert fake_relay.posted[0]["asset"] == {"votes": votes}
    assert "Transaction ID:" in result.output


def test_vote_from_file(invoke, fake_relay, sender_passphrase, tmp_path):
    vote_file = tmp_path / "votes.json"
    vote_file.write_text('{"alice": 100}', encoding="utf-8")
    result = invoke(
        "vote", "--delegate", str(vote_file), "--fee", "1", "--passphrase", sender_passphrase
    )
    assert result.exit_code == 0, result.output
    assert fake_relay.posted[0]["asset"] == {"votes": {"alice": 100}}


def test_vote_cancel(invoke, fake_relay, sender_passphrase):
    result = invoke("vote", "--delegate", "{}", "--fee", "1", "--passphrase", sender_passphrase)
    assert result.exit_code == 0, result.output
    assert "Cancelling all votes" in result.output
    assert fake_relay.posted[0]["asset"] == {"votes": {}}


@pytest.mark.parametrize(
    "delegate",
    ['{"alice": 60}', "alice", '{"alice": 100.001}', json.dumps({"a" * 300: 100})],
)
def test_vote_invalid_makes_no_request(invoke, fake_relay, sender_passphrase, delegate):
    result = invoke(
        "vote", "--delegate", delegate, "--fee", "1", "--passphrase", sender_passphrase
    )
    assert result.exit_code == 1
    assert fake_relay.requests == []
