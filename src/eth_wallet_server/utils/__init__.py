# src/eth_wallet_server/utils/__init__.py
from .logger import setup_logging, get_logger
from .addresses import validate_address
from .units import eth_to_wei, wei_to_eth, wei_to_gwei, format_decimal

__all__ = [
    'setup_logging', 'get_logger', 'validate_address',
    'eth_to_wei', 'wei_to_eth', 'wei_to_gwei', 'format_decimal'
]
