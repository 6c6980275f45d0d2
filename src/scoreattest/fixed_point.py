"""scoreattest.fixed_point — Exact decimal string to scaled integer conversion.

Scores arrive from the scoring service as decimal strings ("5.6789") and are
stored on-chain as integers with an implicit number of fractional digits.
The conversion never goes through a float: the string is split into its
integer and fractional parts and recombined with integer arithmetic.

Excess fractional digits are truncated toward zero, never rounded:

    >>> to_scaled("2.12345", 4)
    21234
    >>> to_scaled("2.1234", 4)
    21234
"""

from __future__ import annotations

import re
from decimal import Decimal

from .errors import MalformedDecimal

SCORE_DECIMALS = 4

_DECIMAL_RE = re.compile(r"(?P<sign>[+-]?)(?P<int>\d*)(?:\.(?P<frac>\d*))?", re.ASCII)


def _split(decimal_str: str) -> tuple[bool, str, str]:
    """Return (negative, integer digits, fractional digits)."""
    if not isinstance(decimal_str, str):
        raise MalformedDecimal(repr(decimal_str))
    m = _DECIMAL_RE.fullmatch(decimal_str)
    if not m:
        raise MalformedDecimal(decimal_str)
    int_part = m.group("int")
    frac_part = m.group("frac") or ""
    # "", "-", "." carry no digits at all
    if not int_part and not frac_part:
        raise MalformedDecimal(decimal_str)
    return m.group("sign") == "-", int_part, frac_part


def to_scaled(decimal_str: str, scale_digits: int = SCORE_DECIMALS) -> int:
    """Convert a decimal string to an integer scaled by 10**scale_digits.

    Raises:
        MalformedDecimal: if the string is not ``[+-]digits[.digits]``.
    """
    if scale_digits < 0:
        raise ValueError(f"scale_digits must be >= 0, got {scale_digits}")
    negative, int_part, frac_part = _split(decimal_str)

    frac_part = frac_part[:scale_digits].ljust(scale_digits, "0")
    value = int((int_part or "0") + frac_part)
    return -value if negative else value


def from_scaled(value: int, scale_digits: int = SCORE_DECIMALS) -> Decimal:
    """Inverse of to_scaled for values that were not truncated."""
    return Decimal(value).scaleb(-scale_digits)


def is_positive(decimal_str: str) -> bool:
    """True when the decimal string denotes a value strictly above zero."""
    negative, int_part, frac_part = _split(decimal_str)
    if negative:
        return False
    return any(ch != "0" for ch in int_part + frac_part)
