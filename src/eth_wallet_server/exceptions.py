# src/eth_wallet_server/exceptions.py
from enum import Enum


class WalletServerError(Exception):
    """Base exception class for wallet server errors"""
    kind = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(WalletServerError):
    """Raised when settings cannot be resolved"""
    kind = "CONFIGURATION_ERROR"


class KeyStoreError(WalletServerError):
    """Raised when the wallet key cannot be loaded or created"""
    kind = "KEYSTORE_ERROR"


class ValidationError(WalletServerError):
    """Raised when client input is malformed"""
    kind = "VALIDATION_ERROR"


class RpcErrorKind(str, Enum):
    CONNECTION = "RPC_CONNECTION_ERROR"
    NODE = "RPC_NODE_ERROR"


class RpcError(WalletServerError):
    """Raised when the blockchain node is unreachable or rejects a request"""

    def __init__(self, message: str, rpc_kind: RpcErrorKind = RpcErrorKind.NODE):
        super().__init__(message)
        self.rpc_kind = rpc_kind

    @property
    def kind(self) -> str:
        return self.rpc_kind.value


class NotFoundError(WalletServerError):
    """Raised when a route or resource does not exist"""
    kind = "NOT_FOUND"


class InternalError(WalletServerError):
    """Raised when an internal invariant is violated"""
    kind = "INTERNAL_ERROR"
