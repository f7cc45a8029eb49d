# src/eth_wallet_server/api/dependencies.py
from fastapi import Request

from ..wallet.api import WalletAPI


def get_wallet_api(request: Request) -> WalletAPI:
    return request.app.state.wallet_api
