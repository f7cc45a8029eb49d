# src/eth_wallet_server/config/__init__.py
from .settings import Settings, ConfigLoader, resolve

__all__ = ['Settings', 'ConfigLoader', 'resolve']
