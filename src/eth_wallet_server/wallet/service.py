# src/eth_wallet_server/wallet/service.py
import asyncio
import logging
from typing import Any, Dict, Tuple

from ..blockchain.client import BlockchainClient
from ..utils.addresses import validate_address
from ..utils.units import eth_to_wei, format_decimal, wei_to_eth
from .keys import WalletAccount
from .models import TransactionRequest, TransactionResult

logger = logging.getLogger(__name__)


class WalletService:
    def __init__(self, client: BlockchainClient, chain_id: int):
        self.client = client
        self.chain_id = chain_id

    async def build_and_send(
        self,
        request: TransactionRequest,
        account: WalletAccount
    ) -> TransactionResult:
        """Validate, sign and broadcast a transfer from the wallet account"""
        to_address = validate_address(request.to)
        value = eth_to_wei(request.amount_eth)

        gas_price, gas_limit = await self._resolve_gas(request, to_address, value, account)
        nonce = await self.client.get_transaction_count(account.address)

        transaction = self.build_transaction(to_address, value, gas_price, gas_limit, nonce)
        raw_transaction = account.sign_transaction(transaction)

        # A broadcast cannot be recalled: let it finish even if the request is abandoned
        tx_hash = await asyncio.shield(self.client.send_raw_transaction(raw_transaction))
        logger.info(
            f"Transaction sent: {tx_hash} from {account.address} to {to_address} "
            f"value={value} wei nonce={nonce}"
        )

        return TransactionResult(
            transaction_hash=tx_hash,
            from_address=account.address,
            to=to_address,
            amount_wei=str(value),
            amount_eth=format_decimal(wei_to_eth(value)),
            gas_price=str(gas_price),
            gas_limit=gas_limit,
            nonce=nonce,
            chain_id=self.chain_id,
        )

    async def _resolve_gas(
        self,
        request: TransactionRequest,
        to_address: str,
        value: int,
        account: WalletAccount
    ) -> Tuple[int, int]:
        # Caller-supplied values are used verbatim, without clamping
        gas_price = request.gas_price
        if gas_price is None:
            gas_price = await self.client.get_gas_price()

        gas_limit = request.gas_limit
        if gas_limit is None:
            gas_limit = await self.client.estimate_gas(to_address, value, account.address)

        return gas_price, gas_limit

    def build_transaction(
        self,
        to_address: str,
        value: int,
        gas_price: int,
        gas_limit: int,
        nonce: int
    ) -> Dict[str, Any]:
        """Legacy transaction envelope signed with EIP-155 replay protection"""
        return {
            "to": to_address,
            "value": value,
            "gas": gas_limit,
            "gasPrice": gas_price,
            "nonce": nonce,
            "chainId": self.chain_id,
        }
