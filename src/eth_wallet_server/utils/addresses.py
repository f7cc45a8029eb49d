# src/eth_wallet_server/utils/addresses.py
import re

from web3 import Web3

from ..exceptions import ValidationError

ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]{40}$')


def validate_address(address: str) -> str:
    """Validate a 0x-prefixed 20-byte hex address and return its checksummed form.

    All-lowercase and all-uppercase hex are accepted as-is; mixed case must
    carry a valid EIP-55 checksum.
    """
    if not isinstance(address, str) or not ADDRESS_PATTERN.match(address):
        raise ValidationError(f"Invalid address: {address!r}")

    body = address[2:]
    if body != body.lower() and body != body.upper():
        if not Web3.is_checksum_address(address):
            raise ValidationError(f"Invalid address checksum: {address}")

    return Web3.to_checksum_address(address)
