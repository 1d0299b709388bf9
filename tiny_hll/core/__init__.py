"""
Core functionality for tiny-hll.
"""

from tiny_hll.core.base import CardinalityEstimator, StreamSummary
from tiny_hll.core.bits import (
    HASH_BITS,
    bottom_bits,
    rank,
    register_count,
    top_bits,
    trailing_zeros,
)
from tiny_hll.core.errors import (
    HyperLogLogError,
    InvalidPrecisionError,
    RegisterOverflowError,
)
from tiny_hll.core.hash import HashFunction, fnv1a_32, hash32, murmurhash3_32

__all__ = [
    # Base classes
    "StreamSummary",
    "CardinalityEstimator",
    # Errors
    "HyperLogLogError",
    "InvalidPrecisionError",
    "RegisterOverflowError",
    # Bit helpers
    "HASH_BITS",
    "top_bits",
    "bottom_bits",
    "trailing_zeros",
    "rank",
    "register_count",
    # Hash functions
    "HashFunction",
    "hash32",
    "murmurhash3_32",
    "fnv1a_32",
]
