# tests/conftest.py
import pytest
from eth_account import Account
from fastapi.testclient import TestClient

from eth_wallet_server.api.server import build_wallet_api, create_app
from eth_wallet_server.config.settings import Settings
from eth_wallet_server.wallet.keys import WalletAccount

TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_TX_HASH = "0x" + "ab" * 32
RECIPIENT = "0x0000000000000000000000000000000000000001"


class FakeBlockchainClient:
    """In-memory stand-in for BlockchainClient that records every call"""

    rpc_url = "http://fake-node:8545"

    def __init__(
        self,
        balance: int = 0,
        gas_price: int = 20_000_000_000,
        gas_estimate: int = 21_000,
        nonce: int = 5,
        network_id: int = 1,
        block_number: int = 1_000_000,
        tx_hash: str = TEST_TX_HASH,
        connected: bool = True
    ):
        self.balance = balance
        self.gas_price = gas_price
        self.gas_estimate = gas_estimate
        self.nonce = nonce
        self.network_id = network_id
        self.block_number = block_number
        self.tx_hash = tx_hash
        self.connected = connected
        self.errors = {}
        self.calls = []
        self.sent = []
        self.send_gate = None
        self.send_started = False
        self.closed = False

    def _record(self, operation, *args):
        self.calls.append((operation,) + args)
        if operation in self.errors:
            raise self.errors[operation]

    def called(self, operation):
        return [call for call in self.calls if call[0] == operation]

    async def get_balance(self, address):
        self._record("get_balance", address)
        return self.balance

    async def get_gas_price(self):
        self._record("get_gas_price")
        return self.gas_price

    async def estimate_gas(self, to, value, from_address=None):
        self._record("estimate_gas", to, value, from_address)
        return self.gas_estimate

    async def get_transaction_count(self, address):
        self._record("get_transaction_count", address)
        return self.nonce

    async def send_raw_transaction(self, raw_transaction):
        self._record("send_raw_transaction", raw_transaction)
        self.send_started = True
        if self.send_gate is not None:
            await self.send_gate.wait()
        self.sent.append(raw_transaction)
        return self.tx_hash

    async def get_network_id(self):
        self._record("get_network_id")
        return self.network_id

    async def get_block_number(self):
        self._record("get_block_number")
        return self.block_number

    async def is_connected(self):
        return self.connected

    async def close(self):
        self.closed = True


@pytest.fixture
def account():
    return WalletAccount(Account.from_key(TEST_PRIVATE_KEY))


@pytest.fixture
def settings(tmp_path):
    return Settings(key_file=str(tmp_path / "account_config.json"), network_id=1)


@pytest.fixture
def fake_client():
    return FakeBlockchainClient()


@pytest.fixture
def wallet_api(settings, account, fake_client):
    return build_wallet_api(settings, account, client=fake_client)


@pytest.fixture
def app(wallet_api):
    return create_app(wallet_api)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
