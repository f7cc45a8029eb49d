# File: src/eth_wallet_server/api/routes/wallet.py
from fastapi import APIRouter, Depends

from ...wallet.api import WalletAPI
from ...wallet.models import (
    BalanceInfo,
    GasEstimate,
    GasPriceInfo,
    TransactionRequest,
    TransactionResult,
)
from ..dependencies import get_wallet_api

router = APIRouter(tags=["wallet"])


@router.get("/balance", response_model=BalanceInfo)
async def get_wallet_balance(wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.get_wallet_balance()


@router.get("/balance/{address}", response_model=BalanceInfo)
async def get_address_balance(address: str, wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.get_address_balance(address)


@router.get("/gas-price", response_model=GasPriceInfo)
async def get_gas_price(wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.get_gas_price()


@router.get("/estimate-gas/{to}/{amount}", response_model=GasEstimate)
async def estimate_gas(to: str, amount: str, wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.estimate_gas(to, amount)


@router.post("/transaction/send", response_model=TransactionResult)
async def send_transaction(
    request: TransactionRequest,
    wallet_api: WalletAPI = Depends(get_wallet_api)
):
    return await wallet_api.send_transaction(request)
