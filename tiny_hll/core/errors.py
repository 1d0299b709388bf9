"""
Exceptions raised by tiny-hll.
"""

from typing import Any


class HyperLogLogError(Exception):
    """Base class for all tiny-hll errors."""


class InvalidPrecisionError(HyperLogLogError, ValueError):
    """
    Raised when an estimator is constructed with an unsupported precision.

    Attributes:
        value: The precision that was rejected.
        min_precision: Smallest accepted precision.
        max_precision: Largest accepted precision.
    """

    def __init__(self, value: Any, min_precision: int, max_precision: int):
        self.value = value
        self.min_precision = min_precision
        self.max_precision = max_precision
        super().__init__(
            f"Precision must be an integer between {min_precision} and "
            f"{max_precision} (inclusive), got {value!r}"
        )


class RegisterOverflowError(HyperLogLogError, OverflowError):
    """Raised when a register count cannot be represented on this platform."""

    def __init__(self, precision: int):
        self.precision = precision
        super().__init__(f"2**{precision} registers exceeds the addressable size")
