"""
Bit manipulation helpers for HyperLogLog.

All helpers operate on unsigned 32-bit values held in Python ints. Python
ints never overflow, so masks such as ``(1 << 32) - 1`` are exact. Inputs outside the
32-bit domain are rejected.
"""

import sys

from tiny_hll.core.errors import RegisterOverflowError

HASH_BITS = 32
_HASH_MASK = (1 << HASH_BITS) - 1


def _check_operands(value: int, n: int) -> None:
    if not 0 <= value <= _HASH_MASK:
        raise ValueError(f"Value {value} is not an unsigned 32-bit integer")
    if not 0 <= n <= HASH_BITS:
        raise ValueError(f"Bit count must be between 0 and {HASH_BITS}, got {n}")


def top_bits(value: int, n: int) -> int:
    """
    Return the ``n`` most significant bits of a 32-bit value.

    Args:
        value: An unsigned 32-bit integer.
        n: Number of bits to keep (0 to 32).

    Returns:
        An integer in ``[0, 2**n)``. ``n == 0`` always yields 0.

    Raises:
        ValueError: If ``value`` or ``n`` is out of range.
    """
    _check_operands(value, n)
    return value >> (HASH_BITS - n)


def bottom_bits(value: int, n: int) -> int:
    """
    Return the ``n`` least significant bits of a 32-bit value.

    For ``n == 32`` the mask is ``0xFFFFFFFF`` and the value is returned
    unchanged.

    Raises:
        ValueError: If ``value`` or ``n`` is out of range.
    """
    _check_operands(value, n)
    return value & ((1 << n) - 1)


def trailing_zeros(value: int, width: int) -> int:
    """Count trailing zero bits of ``value``; a zero value counts as ``width``."""
    if value == 0:
        return width
    # value & -value isolates the lowest set bit
    return (value & -value).bit_length() - 1


def rank(remainder: int, width: int) -> int:
    """
    Rank of a hash remainder: trailing zeros plus one.

    An all-zero remainder of ``width`` bits has rank ``width + 1``.
    """
    return trailing_zeros(remainder, width) + 1


def register_count(precision: int) -> int:
    """
    Number of registers addressed by ``precision`` index bits (``2**precision``).

    Raises:
        ValueError: If precision is negative.
        RegisterOverflowError: If the count does not fit in ``sys.maxsize``.
    """
    if precision < 0:
        raise ValueError(f"Precision must be non-negative, got {precision}")

    count = 1 << precision
    if count > sys.maxsize:
        raise RegisterOverflowError(precision)
    return count
