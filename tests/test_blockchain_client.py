# tests/test_blockchain_client.py
import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import aiohttp
import pytest
from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from eth_wallet_server.blockchain.client import BlockchainClient
from eth_wallet_server.exceptions import RpcError, RpcErrorKind

from conftest import RECIPIENT, TEST_TX_HASH

SENDER = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


async def resolved(value):
    return value


async def failing(error):
    raise error


@pytest.fixture
def w3():
    return SimpleNamespace(
        eth=SimpleNamespace(
            get_balance=AsyncMock(return_value=10 ** 18),
            estimate_gas=AsyncMock(return_value=21_000),
            get_transaction_count=AsyncMock(return_value=7),
            send_raw_transaction=AsyncMock(return_value=bytes.fromhex("ab" * 32)),
        ),
        net=SimpleNamespace(),
        provider=SimpleNamespace(disconnect=AsyncMock()),
        is_connected=AsyncMock(return_value=True),
    )


@pytest.fixture
def blockchain(w3):
    return BlockchainClient("http://fake-node:8545", web3=w3)


class TestBlockchainClient:
    def test_builds_http_provider(self):
        client = BlockchainClient("http://127.0.0.1:8545", timeout=5)
        assert isinstance(client.w3, AsyncWeb3)
        assert client.w3.provider.endpoint_uri == "http://127.0.0.1:8545"
        assert client.rpc_url == "http://127.0.0.1:8545"

    def test_single_attempt_per_call(self, mocker):
        client = BlockchainClient("http://127.0.0.1:1", timeout=1)
        post = mocker.patch.object(
            client.w3.provider._request_session_manager,
            "async_make_post_request",
            new=AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))
        )
        with pytest.raises(RpcError) as exc_info:
            asyncio.run(client.send_raw_transaction(b"\x01\x02"))
        assert exc_info.value.rpc_kind is RpcErrorKind.CONNECTION
        assert post.await_count == 1

    def test_get_balance(self, blockchain, w3):
        assert asyncio.run(blockchain.get_balance(SENDER)) == 10 ** 18
        w3.eth.get_balance.assert_awaited_once_with(SENDER)

    def test_get_gas_price(self, blockchain, w3):
        w3.eth.gas_price = resolved(20_000_000_000)
        assert asyncio.run(blockchain.get_gas_price()) == 20_000_000_000

    def test_estimate_gas(self, blockchain, w3):
        assert asyncio.run(blockchain.estimate_gas(RECIPIENT, 5, SENDER)) == 21_000
        w3.eth.estimate_gas.assert_awaited_once_with({"to": RECIPIENT, "value": 5, "from": SENDER})

    def test_estimate_gas_without_sender(self, blockchain, w3):
        asyncio.run(blockchain.estimate_gas(RECIPIENT, 5))
        w3.eth.estimate_gas.assert_awaited_once_with({"to": RECIPIENT, "value": 5})

    def test_nonce_counts_pending(self, blockchain, w3):
        assert asyncio.run(blockchain.get_transaction_count(SENDER)) == 7
        w3.eth.get_transaction_count.assert_awaited_once_with(SENDER, "pending")

    def test_send_raw_transaction_returns_hex(self, blockchain, w3):
        tx_hash = asyncio.run(blockchain.send_raw_transaction(b"\x01\x02"))
        assert tx_hash == TEST_TX_HASH
        w3.eth.send_raw_transaction.assert_awaited_once_with(b"\x01\x02")

    def test_network_id_from_string(self, blockchain, w3):
        w3.net.version = resolved("11155111")
        assert asyncio.run(blockchain.get_network_id()) == 11155111

    def test_block_number(self, blockchain, w3):
        w3.eth.block_number = resolved(123)
        assert asyncio.run(blockchain.get_block_number()) == 123

    @pytest.mark.parametrize("error,kind", [
        (aiohttp.ClientConnectionError("refused"), RpcErrorKind.CONNECTION),
        (asyncio.TimeoutError(), RpcErrorKind.CONNECTION),
        (ConnectionRefusedError("refused"), RpcErrorKind.CONNECTION),
        (ValueError({"code": -32000, "message": "insufficient funds"}), RpcErrorKind.NODE),
        (Web3Exception("bad response"), RpcErrorKind.NODE),
    ])
    def test_error_mapping(self, blockchain, w3, error, kind):
        w3.eth.get_balance.side_effect = error
        with pytest.raises(RpcError) as exc_info:
            asyncio.run(blockchain.get_balance(SENDER))
        assert exc_info.value.rpc_kind is kind
        assert exc_info.value.kind == kind.value
        assert exc_info.value.__cause__ is error

    def test_property_call_errors_are_mapped(self, blockchain, w3):
        w3.eth.gas_price = failing(asyncio.TimeoutError())
        with pytest.raises(RpcError) as exc_info:
            asyncio.run(blockchain.get_gas_price())
        assert exc_info.value.rpc_kind is RpcErrorKind.CONNECTION

    def test_unexpected_errors_propagate(self, blockchain, w3):
        w3.eth.get_balance.side_effect = RuntimeError("bug")
        with pytest.raises(RuntimeError):
            asyncio.run(blockchain.get_balance(SENDER))

    def test_is_connected(self, blockchain, w3):
        assert asyncio.run(blockchain.is_connected()) is True
        w3.is_connected.side_effect = aiohttp.ClientConnectionError("refused")
        assert asyncio.run(blockchain.is_connected()) is False

    def test_close_disconnects_provider(self, blockchain, w3):
        asyncio.run(blockchain.close())
        w3.provider.disconnect.assert_awaited_once()
