"""
Algorithm implementations for tiny-hll.
"""

from tiny_hll.algorithms.hyperloglog import HyperLogLog, alpha, indicator

__all__ = [
    "HyperLogLog",
    "alpha",
    "indicator",
]
