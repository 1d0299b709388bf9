"""
tiny-hll - HyperLogLog cardinality estimation

tiny-hll estimates the number of distinct elements in a data stream using
a fixed, small amount of memory.
"""

__version__ = "0.1.0"

from tiny_hll.algorithms.hyperloglog import (
    DEFAULT_PRECISION,
    MAX_PRECISION,
    MIN_PRECISION,
    HyperLogLog,
)
from tiny_hll.core.base import CardinalityEstimator, StreamSummary
from tiny_hll.core.errors import (
    HyperLogLogError,
    InvalidPrecisionError,
    RegisterOverflowError,
)
from tiny_hll.core.hash import fnv1a_32, hash32, murmurhash3_32

__all__ = [
    # Core base classes
    "StreamSummary",
    "CardinalityEstimator",
    # Errors
    "HyperLogLogError",
    "InvalidPrecisionError",
    "RegisterOverflowError",
    # Hash functions
    "hash32",
    "murmurhash3_32",
    "fnv1a_32",
    # Algorithm implementations
    "HyperLogLog",
    "MIN_PRECISION",
    "MAX_PRECISION",
    "DEFAULT_PRECISION",
]
