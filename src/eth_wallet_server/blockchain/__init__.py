# src/eth_wallet_server/blockchain/__init__.py
from .client import BlockchainClient

__all__ = ['BlockchainClient']
