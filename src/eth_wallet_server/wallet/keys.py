# src/eth_wallet_server/wallet/keys.py
import json
import logging
import os
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..exceptions import KeyStoreError
from .models import AccountInfo

logger = logging.getLogger(__name__)

KEY_FIELDS = ("private_key", "secret_key")
ADDRESS_FIELDS = ("address", "public_address")


class WalletAccount:
    """The process wallet: an address plus the key that controls it.

    The private key never leaves this object except as a signature. There is
    no accessor, dict form or serializer for it; repr and str show the address only.
    """

    __slots__ = ("_account",)

    def __init__(self, account: LocalAccount):
        self._account = account

    @property
    def address(self) -> str:
        """Checksummed account address"""
        return self._account.address

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        """Sign a transaction dict and return the raw encoded transaction"""
        signed = self._account.sign_transaction(transaction)
        return bytes(signed.raw_transaction)

    def info(self) -> AccountInfo:
        """Public, redacted view of the account"""
        return AccountInfo(address=self.address)

    def __repr__(self) -> str:
        return f"WalletAccount(address={self.address})"

    __str__ = __repr__

    def __reduce__(self):
        raise TypeError("WalletAccount cannot be pickled")


def generate_account() -> LocalAccount:
    """Generate a new random secp256k1 key pair"""
    try:
        return Account.create()
    except (NotImplementedError, OSError) as e:
        raise KeyStoreError(f"Entropy source unavailable for key generation: {e}") from e


def save_account(account: LocalAccount, path: str):
    """Write a new key file readable by the owner only; never overwrites"""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    key_data = {
        "address": account.address,
        "private_key": "0x" + bytes(account.key).hex(),
    }
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    except FileExistsError as e:
        raise KeyStoreError(f"Key file already exists: {path}") from e
    except OSError as e:
        raise KeyStoreError(f"Failed to create key file {path}: {e.strerror}") from e

    try:
        with os.fdopen(fd, 'w') as f:
            json.dump(key_data, f, indent=2)
    except OSError as e:
        # never leave a partial key file behind
        os.unlink(path)
        raise KeyStoreError(f"Failed to write key file {path}: {e.strerror}") from None
    logger.info(f"Account saved to: {path}")


def load_account(path: str) -> WalletAccount:
    """Load and verify the key stored at path"""
    try:
        with open(path, 'r') as f:
            key_data = json.load(f)
    except OSError as e:
        raise KeyStoreError(f"Failed to read key file {path}: {e.strerror}") from e
    except ValueError:
        raise KeyStoreError(f"Key file {path} is not valid JSON") from None

    if not isinstance(key_data, dict):
        raise KeyStoreError(f"Key file {path} must contain a JSON object")

    secret = next((key_data[k] for k in KEY_FIELDS if k in key_data), None)
    if not isinstance(secret, str):
        raise KeyStoreError(f"Key file {path} has no private key")

    try:
        local_account = Account.from_key(secret)
    except Exception:
        # the parser's message may echo key material
        raise KeyStoreError(f"Key file {path} does not hold a valid secp256k1 private key") from None

    recorded = next((key_data[k] for k in ADDRESS_FIELDS if k in key_data), None)
    if recorded is not None and str(recorded).lower() != local_account.address.lower():
        raise KeyStoreError(f"Address recorded in {path} does not match its private key")

    logger.info(f"Account loaded from: {path}")
    return WalletAccount(local_account)


def load_or_create(path: str) -> WalletAccount:
    """Load the wallet key at path, generating and persisting one if absent"""
    if os.path.exists(path):
        logger.info(f"Loading existing wallet from: {path}")
        return load_account(path)

    logger.info("Creating new wallet...")
    local_account = generate_account()
    save_account(local_account, path)
    account = WalletAccount(local_account)
    logger.info(f"New account created with address: {account.address}")
    return account
