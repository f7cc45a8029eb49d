# File: src/eth_wallet_server/api/routes/account.py
from fastapi import APIRouter, Depends

from ...wallet.api import WalletAPI
from ...wallet.models import AccountInfo, HealthStatus, NetworkInfo
from ..dependencies import get_wallet_api

router = APIRouter(tags=["account"])


@router.get("/", response_model=HealthStatus)
@router.get("/health", response_model=HealthStatus)
async def health_check(wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.health()


@router.get("/network", response_model=NetworkInfo)
async def get_network_info(wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.get_network_info()


@router.get("/account", response_model=AccountInfo)
async def get_account_info(wallet_api: WalletAPI = Depends(get_wallet_api)):
    return await wallet_api.get_account_info()
