# src/eth_wallet_server/api/routes/__init__.py
from .account import router as account_router
from .wallet import router as wallet_router

__all__ = ['account_router', 'wallet_router']
