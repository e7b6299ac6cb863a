"""
Pytest fixtures for the Safe relayer SDK tests.
"""
import time

import pytest
from eth_account import Account

from relayer_sdk import LocalSigner, RelayClient
from relayer_sdk.config import get_contract_config

# Constants for testing
TEST_RELAYER_URL = "https://relayer.example.com"
TEST_CHAIN_ID = 137
# publicly known development key
TEST_PRIV_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

USDC = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"
CTF = "0x4D97DCd97eC945f40cF65F87097ACe5EA0476045"
# approve(CTF, max uint256)
APPROVE_CALLDATA = (
    "0x095ea7b3"
    "0000000000000000000000004d97dcd97ec945f40cf65f87097ace5ea0476045"
    "ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
)

EXPECTED_SAFE_SIG = (
    "0xf368488355b0566e99eff3bccc35e98b77d8f3a6e6866176188488c34f0305b0"
    "7e4a4c600c7a1592e4ac1e96b5887ebff2cb26987a3ad501006b39944df098c21f"
)
EXPECTED_SAFE_CREATE_SIG = (
    "0xe3e791c24134b7bebe93b4771bd07c7fe7bbe115eeb0bf629ac3b7a435e7ac8d"
    "05f979729d873f7d0e16205becf48ee450aa382bc28c65eedcd6454e81d81f921b"
)

SAFE_CONTRACTS = get_contract_config(TEST_CHAIN_ID).safe_contracts


@pytest.fixture(autouse=True)
def sleep_calls(monkeypatch):
    """Make time.sleep instantaneous and record the requested delays."""
    calls = []
    monkeypatch.setattr(time, "sleep", lambda seconds: calls.append(seconds))
    return calls


@pytest.fixture
def test_account():
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def local_signer():
    return LocalSigner(TEST_PRIV_KEY)


@pytest.fixture
def client(local_signer):
    """Client with a signer and no authenticator"""
    return RelayClient(TEST_RELAYER_URL, TEST_CHAIN_ID, signer=local_signer)


@pytest.fixture
def readonly_client():
    """Client without a signer"""
    return RelayClient(TEST_RELAYER_URL, TEST_CHAIN_ID)


class StaticAuthenticator:
    """Authenticator returning fixed headers and recording calls"""

    def __init__(self, headers, valid=True):
        self.headers = headers
        self.valid = valid
        self.calls = []

    def is_valid(self):
        return self.valid

    def generate_builder_headers(self, method, path, body=None):
        self.calls.append((method, path, body))
        return self.headers


def relayer_record(transaction_id="tx-1", state="STATE_NEW", **overrides):
    """Build a relayer transaction record as returned on the wire"""
    record = {
        "transactionID": transaction_id,
        "transactionHash": "0x" + "ab" * 32,
        "from": TEST_ADDRESS,
        "to": USDC,
        "proxyAddress": "0x" + "11" * 20,
        "data": APPROVE_CALLDATA,
        "nonce": "0",
        "value": "0",
        "state": state,
        "type": "SAFE",
        "metadata": "",
        "createdAt": "2024-05-01T12:00:00Z",
        "updatedAt": "2024-05-01T12:00:05Z",
    }
    record.update(overrides)
    return record
