# File: src/eth_wallet_server/wallet/api.py
import logging
from typing import Optional

from .. import __version__
from ..blockchain.client import BlockchainClient
from ..config.settings import NETWORK_NAMES, Settings
from ..exceptions import InternalError, RpcError
from ..utils.addresses import validate_address
from ..utils.units import eth_to_wei, format_decimal, wei_to_eth, wei_to_gwei
from .keys import WalletAccount
from .models import (
    AccountInfo,
    BalanceInfo,
    GasEstimate,
    GasPriceInfo,
    HealthStatus,
    NetworkInfo,
    TransactionRequest,
    TransactionResult,
)
from .service import WalletService

logger = logging.getLogger(__name__)


class WalletAPI:
    """Request/response shaping for the HTTP routes; no business logic lives here."""

    def __init__(
        self,
        settings: Settings,
        client: BlockchainClient,
        service: WalletService,
        account: Optional[WalletAccount]
    ):
        self.settings = settings
        self.client = client
        self.service = service
        self.account = account

    def _require_account(self) -> WalletAccount:
        if self.account is None:
            raise InternalError("Wallet account is not initialized")
        return self.account

    async def check_node(self) -> bool:
        """Startup probe; an unreachable node is reported but not fatal"""
        if not await self.client.is_connected():
            logger.warning(f"Failed to reach blockchain node at {self.client.rpc_url}")
            logger.warning("Chain-backed endpoints will be unavailable until it responds")
            return False

        try:
            node_network_id = await self.client.get_network_id()
        except RpcError as e:
            logger.warning(f"Could not read node network id: {e}")
            return False

        if node_network_id != self.settings.network_id:
            logger.warning(
                f"Node reports network id {node_network_id} but {self.settings.network_id} "
                f"is configured; transactions are signed for {self.settings.network_id}"
            )
        logger.info(f"Connected to blockchain node (network id {node_network_id})")
        return True

    async def health(self) -> HealthStatus:
        return HealthStatus(service="eth-wallet-server", version=__version__)

    async def get_account_info(self) -> AccountInfo:
        return self._require_account().info()

    async def get_network_info(self) -> NetworkInfo:
        network_id = await self.client.get_network_id()
        try:
            current_block = await self.client.get_block_number()
        except RpcError as e:
            logger.warning(f"Failed to get block number: {e}")
            current_block = None

        return NetworkInfo(
            network_id=network_id,
            network_name=NETWORK_NAMES.get(network_id, "Unknown"),
            configured_network_id=self.settings.network_id,
            current_block=current_block,
            connected=True,
        )

    async def get_wallet_balance(self) -> BalanceInfo:
        return await self._balance(self._require_account().address)

    async def get_address_balance(self, address: str) -> BalanceInfo:
        return await self._balance(validate_address(address))

    async def _balance(self, address: str) -> BalanceInfo:
        balance_wei = await self.client.get_balance(address)
        return BalanceInfo(
            address=address,
            wei=str(balance_wei),
            eth=format_decimal(wei_to_eth(balance_wei)),
            network_id=self.settings.network_id,
        )

    async def get_gas_price(self) -> GasPriceInfo:
        gas_price = await self.client.get_gas_price()
        return GasPriceInfo(wei=str(gas_price), gwei=format_decimal(wei_to_gwei(gas_price)))

    async def estimate_gas(self, to: str, amount: str) -> GasEstimate:
        account = self._require_account()
        to_address = validate_address(to)
        value = eth_to_wei(amount)
        gas = await self.client.estimate_gas(to_address, value, account.address)
        return GasEstimate(gas=gas, to=to_address, amount_wei=str(value))

    async def send_transaction(self, request: TransactionRequest) -> TransactionResult:
        account = self._require_account()
        # Reject malformed input before any RPC round trip
        validate_address(request.to)
        eth_to_wei(request.amount_eth)
        return await self.service.build_and_send(request, account)
