# src/eth_wallet_server/api/__init__.py
from .server import build_wallet_api, create_app

__all__ = ['build_wallet_api', 'create_app']
