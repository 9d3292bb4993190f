"""Pytest configuration and shared fixtures."""

import os

import pytest
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from gorb_amm.program.constants import TOKEN_ACCOUNT_SIZE, TOKEN_PROGRAM_ID


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (run offline)")
    config.addinivalue_line("markers", "devnet: Integration tests against a live GorbChain RPC")


def pytest_collection_modifyitems(config, items):
    """Skip live-network tests unless explicitly requested."""
    run_devnet = config.getoption("-k", default="") and "devnet" in config.getoption("-k", default="")

    for item in items:
        if "test_devnet" in str(item.fspath):
            if not run_devnet and "DEVNET_TESTS" not in os.environ:
                item.add_marker(pytest.mark.skip(reason="Devnet tests skipped by default. Set DEVNET_TESTS=1 or use -k devnet"))


# =============================================================================
# Mock ledger transport
# =============================================================================


class MockResponse:
    def __init__(self, value):
        self.value = value


class MockBlockhash:
    def __init__(self, blockhash):
        self.blockhash = blockhash


class MockAccount:
    def __init__(self, data: bytes = b"", lamports: int = 0, owner: Pubkey = None):
        self.data = data
        self.lamports = lamports
        self.owner = owner or Pubkey.default()


class MockStatus:
    def __init__(self, err=None, confirmation_status=TransactionConfirmationStatus.Confirmed):
        self.err = err
        self.confirmation_status = confirmation_status


def token_account(amount: int, mint: Pubkey = None, owner: Pubkey = None) -> MockAccount:
    """A token-program-owned account holding ``amount``."""
    data = bytearray(TOKEN_ACCOUNT_SIZE)
    data[0:32] = bytes(mint or Pubkey.new_unique())
    data[32:64] = bytes(owner or Pubkey.new_unique())
    data[64:72] = amount.to_bytes(8, "little")
    return MockAccount(bytes(data), lamports=2039280, owner=TOKEN_PROGRAM_ID)


class MockConnection:
    """Mock RPC connection for testing.

    ``accounts`` maps addresses to MockAccount; ``on_send`` runs when a
    transaction is sent so tests can mutate balances like the ledger would.
    ``status`` may be a list, in which case each query returns the next
    entry and the last one repeats.
    """

    def __init__(self, accounts=None, status=MockStatus(), send_error=None, on_send=None):
        self.accounts = dict(accounts or {})
        self.status = status
        self.send_error = send_error
        self.on_send = on_send
        self.sent = []
        self.status_queries = 0

    async def get_account_info(self, pubkey):
        return MockResponse(self.accounts.get(pubkey))

    async def get_latest_blockhash(self):
        return MockResponse(MockBlockhash(Hash.default()))

    async def send_raw_transaction(self, txn, opts=None):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(txn)
        if self.on_send is not None:
            self.on_send(self)
        return MockResponse(Signature.default())

    async def get_signature_statuses(self, signatures):
        self.status_queries += 1
        if isinstance(self.status, list):
            index = min(self.status_queries, len(self.status)) - 1
            return MockResponse([self.status[index]])
        return MockResponse([self.status])


@pytest.fixture
def connection():
    return MockConnection()
