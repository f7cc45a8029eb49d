# File: src/eth_wallet_server/blockchain/client.py
import asyncio
import logging
from typing import Any, Awaitable, Optional

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import Web3Exception

from ..exceptions import RpcError, RpcErrorKind

logger = logging.getLogger(__name__)

CONNECTION_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)
NODE_ERRORS = (Web3Exception, ValueError)


class BlockchainClient:
    """Thin async wrapper over a JSON-RPC node.

    One instance is shared by all requests; the provider's aiohttp session
    pools connections. Each call is a single attempt with no retry.
    """

    def __init__(self, rpc_url: str, timeout: float = 30.0, web3: Optional[AsyncWeb3] = None):
        self.rpc_url = rpc_url
        if web3 is None:
            provider = AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
                exception_retry_configuration=None,
            )
            web3 = AsyncWeb3(provider)
        self.w3 = web3

    async def _call(self, operation: str, awaitable: Awaitable) -> Any:
        try:
            return await awaitable
        except CONNECTION_ERRORS as e:
            logger.error(f"RPC {operation} failed, node unreachable: {e}")
            raise RpcError(f"Blockchain node unreachable during {operation}",
                           RpcErrorKind.CONNECTION) from e
        except NODE_ERRORS as e:
            logger.error(f"RPC {operation} rejected by node: {e}")
            raise RpcError(f"Blockchain node rejected {operation}: {e}",
                           RpcErrorKind.NODE) from e

    async def get_balance(self, address: str) -> int:
        return int(await self._call("get_balance", self.w3.eth.get_balance(address)))

    async def get_gas_price(self) -> int:
        return int(await self._call("get_gas_price", self.w3.eth.gas_price))

    async def estimate_gas(self, to: str, value: int, from_address: Optional[str] = None) -> int:
        transaction = {"to": to, "value": value}
        if from_address:
            transaction["from"] = from_address
        return int(await self._call("estimate_gas", self.w3.eth.estimate_gas(transaction)))

    async def get_transaction_count(self, address: str) -> int:
        """Next nonce for address, counting transactions still in the mempool"""
        return int(await self._call(
            "get_transaction_count",
            self.w3.eth.get_transaction_count(address, "pending")
        ))

    async def send_raw_transaction(self, raw_transaction: bytes) -> str:
        tx_hash = await self._call(
            "send_raw_transaction",
            self.w3.eth.send_raw_transaction(raw_transaction)
        )
        return Web3.to_hex(tx_hash)

    async def get_network_id(self) -> int:
        return int(await self._call("get_network_id", self.w3.net.version))

    async def get_block_number(self) -> int:
        return int(await self._call("get_block_number", self.w3.eth.block_number))

    async def is_connected(self) -> bool:
        try:
            return bool(await self.w3.is_connected())
        except CONNECTION_ERRORS + NODE_ERRORS as e:
            logger.debug(f"Connectivity probe failed: {e}")
            return False

    async def close(self):
        """Release the provider's pooled HTTP session"""
        await self.w3.provider.disconnect()
