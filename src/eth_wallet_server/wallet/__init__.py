# src/eth_wallet_server/wallet/__init__.py
from .keys import WalletAccount, load_or_create
from .service import WalletService
from .api import WalletAPI

__all__ = ['WalletAccount', 'load_or_create', 'WalletService', 'WalletAPI']
