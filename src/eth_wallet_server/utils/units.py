# src/eth_wallet_server/utils/units.py
from decimal import Decimal, InvalidOperation
from typing import Union

from ..exceptions import ValidationError

ETH_DECIMALS = 18
GWEI_DECIMALS = 9
MAX_UINT256 = 2 ** 256 - 1
MAX_WEI_DIGITS = len(str(MAX_UINT256))


def to_decimal(amount: Union[str, int, Decimal]) -> Decimal:
    """Parse an amount without going through binary floating point"""
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool) or not isinstance(amount, (str, int)):
        raise ValidationError(f"Invalid amount format: {amount!r}")
    try:
        return Decimal(amount.strip() if isinstance(amount, str) else amount)
    except InvalidOperation:
        raise ValidationError(f"Invalid amount format: {amount!r}") from None


def eth_to_wei(amount: Union[str, int, Decimal]) -> int:
    """Convert an ETH amount to wei exactly.

    Amounts with non-zero digits beyond the 18th decimal place are rejected
    rather than rounded, as are negative, non-finite and out-of-range values.
    """
    value = to_decimal(amount)
    if not value.is_finite():
        raise ValidationError("Amount must be a finite number")

    sign, digits, exponent = value.as_tuple()
    coefficient = int(''.join(map(str, digits))) if digits else 0
    if coefficient == 0:
        return 0
    if sign:
        raise ValidationError("Amount must not be negative")

    shift = exponent + ETH_DECIMALS
    if len(str(coefficient)) + shift > MAX_WEI_DIGITS:
        raise ValidationError("Amount exceeds the maximum transferable value")

    if shift >= 0:
        wei = coefficient * 10 ** shift
    elif -shift > len(str(coefficient)):
        raise ValidationError(f"Amount has more than {ETH_DECIMALS} decimal places")
    else:
        wei, remainder = divmod(coefficient, 10 ** -shift)
        if remainder:
            raise ValidationError(f"Amount has more than {ETH_DECIMALS} decimal places")

    if wei > MAX_UINT256:
        raise ValidationError("Amount exceeds the maximum transferable value")
    return wei


def from_base_units(value: int, decimals: int) -> Decimal:
    """Scale an integer amount down by 10**decimals with no context rounding"""
    sign = 1 if value < 0 else 0
    digits = tuple(int(c) for c in str(abs(value)))
    return Decimal((sign, digits, -decimals))


def wei_to_eth(wei: int) -> Decimal:
    return from_base_units(wei, ETH_DECIMALS)


def wei_to_gwei(wei: int) -> Decimal:
    return from_base_units(wei, GWEI_DECIMALS)


def format_decimal(value: Decimal) -> str:
    """Render fixed-point with trailing fractional zeros removed"""
    text = format(value, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text
