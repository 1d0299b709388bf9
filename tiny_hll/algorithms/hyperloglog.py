"""
HyperLogLog cardinality estimator.

The estimator hashes every item to 32 bits. The top ``precision`` bits pick
one of ``m = 2**precision`` registers and the remaining bits give a rank
(trailing zeros + 1). Each register keeps the largest rank it has seen and
the cardinality is estimated from the harmonic mean of ``2**-register``.

The raw estimator is returned as is. There is no linear-counting correction
for small cardinalities and no correction for hash saturation near ``2**32``,
so an empty estimator reports ``alpha * m`` rather than 0.

References:
    - Flajolet, P., Fusy, E., Gandouet, O., & Meunier, F. (2007).
      HyperLogLog: the analysis of a near-optimal cardinality estimation algorithm.
"""

import array
import logging
import math
import sys
from typing import Any, Dict, Iterable, List, Optional, TypeVar

from tiny_hll.core.base import CardinalityEstimator
from tiny_hll.core.bits import (
    HASH_BITS,
    bottom_bits,
    rank,
    register_count,
    top_bits,
)
from tiny_hll.core.errors import InvalidPrecisionError
from tiny_hll.core.hash import HashFunction, hash32

logger = logging.getLogger(__name__)

T = TypeVar("T")  # Type for the items being processed

MIN_PRECISION = 4
MAX_PRECISION = 16
DEFAULT_PRECISION = 4

_HASH_MASK = (1 << HASH_BITS) - 1


def alpha(m: int) -> float:
    """
    Bias-correction constant for ``m`` registers.

    Breakpoints are half-open: ``m == 32`` uses 0.697 and ``m == 64`` uses
    0.709. ``m < 32`` only occurs for precision 4 (m=16).
    """
    if m < 32:
        return 0.673
    if m < 64:
        return 0.697
    if m < 128:
        return 0.709
    return 0.7213 / (1.0 + 1.079 / m)


def indicator(registers: Iterable[int]) -> float:
    """Harmonic-mean indicator Z = 1 / sum(2**-r) over all registers."""
    return 1.0 / math.fsum(math.ldexp(1.0, -r) for r in registers)


class HyperLogLog(CardinalityEstimator[T]):
    """
    HyperLogLog for cardinality estimation in data streams.

    The precision parameter (p) determines both accuracy and memory usage:
    - 2^p one-byte registers
    - standard error of roughly 1.04/sqrt(2^p)

    For common use cases:
    - p=4: 16 registers, ~26% error (default)
    - p=10: ~1KB, ~3.25% error
    - p=12: ~4KB, ~1.62% error
    - p=16: ~64KB, ~0.40% error

    ``add`` is a read-modify-write on the register array. Instances are not
    safe to update from several threads without external locking.
    """

    def __init__(
        self,
        precision: int = DEFAULT_PRECISION,
        hash_func: Optional[HashFunction] = None,
        memory_limit_bytes: Optional[int] = None,
    ):
        """
        Initialize a new HyperLogLog estimator.

        Args:
            precision: Number of leading hash bits used as the register index.
                       Valid values are 4 to 16 inclusive.
            hash_func: Callable returning a 32-bit hash for an item.
                       Defaults to MurmurHash3 (``tiny_hll.core.hash.hash32``).
            memory_limit_bytes: Optional maximum memory usage in bytes.

        Raises:
            InvalidPrecisionError: If precision is not an integer in range.
        """
        super().__init__(memory_limit_bytes)

        if (
            isinstance(precision, bool)
            or not isinstance(precision, int)
            or not MIN_PRECISION <= precision <= MAX_PRECISION
        ):
            raise InvalidPrecisionError(precision, MIN_PRECISION, MAX_PRECISION)

        self._precision = precision
        self._m = register_count(precision)
        self._alpha = alpha(self._m)
        self._hash_func = hash_func if hash_func is not None else hash32

        # Ranks never exceed 32 - precision + 1, so one unsigned byte suffices
        self._registers = array.array("B", bytes(self._m))

        logger.debug(
            "Created HyperLogLog with precision=%d (%d registers, alpha=%.6f)",
            self._precision,
            self._m,
            self._alpha,
        )

    @property
    def precision(self) -> int:
        """Number of hash bits used to select a register."""
        return self._precision

    @property
    def hash_func(self) -> HashFunction:
        """The hash function items are passed through."""
        return self._hash_func

    @property
    def is_empty(self) -> bool:
        """True until the first item is added."""
        return self._items_processed == 0

    def register_count(self) -> int:
        """Number of registers (2^precision)."""
        return self._m

    def add(self, item: T) -> None:
        """
        Add an item to the estimator.

        At most one register changes, and only upwards. Adding the same item
        again leaves the registers untouched.

        Args:
            item: The item to add. Anything ``hash_func`` accepts.
        """
        # Only items that hash successfully are counted
        hash_value = self._hash_func(item) & _HASH_MASK
        super().add(item)

        register_index = top_bits(hash_value, self._precision)

        width = HASH_BITS - self._precision
        item_rank = rank(bottom_bits(hash_value, width), width)

        if item_rank > self._registers[register_index]:
            self._registers[register_index] = item_rank

    def estimate(self) -> float:
        """
        Estimate the number of distinct items added so far.

        Computes ``alpha * m^2 * Z`` without range corrections. Read-only.

        Returns:
            The raw HyperLogLog estimate.
        """
        return self._alpha * float(self._m * self._m) * indicator(self._registers)

    @classmethod
    def create_from_error_rate(
        cls,
        relative_error: float,
        hash_func: Optional[HashFunction] = None,
        memory_limit_bytes: Optional[int] = None,
    ) -> "HyperLogLog[T]":
        """
        Create an estimator whose standard error is at most ``relative_error``.

        Args:
            relative_error: Target standard error, e.g. 0.01 for 1%.
            hash_func: Optional hash function.
            memory_limit_bytes: Optional maximum memory usage in bytes.

        Raises:
            ValueError: If relative_error is not between 0 and 1.
            InvalidPrecisionError: If the required precision exceeds the maximum.
        """
        if not 0 < relative_error < 1:
            raise ValueError("Relative error must be between 0 and 1")

        # 1.04 / sqrt(2^p) <= e  =>  p >= log2((1.04 / e)^2)
        precision = math.ceil(math.log2((1.04 / relative_error) ** 2))
        # Precisions below the minimum are raised to it
        precision = max(MIN_PRECISION, precision)
        if precision > MAX_PRECISION:
            raise InvalidPrecisionError(precision, MIN_PRECISION, MAX_PRECISION)

        logger.debug(
            "Relative error %.4f requires precision %d", relative_error, precision
        )
        return cls(
            precision=precision,
            hash_func=hash_func,
            memory_limit_bytes=memory_limit_bytes,
        )

    @classmethod
    def create_from_memory_limit(
        cls,
        memory_bytes: int,
        hash_func: Optional[HashFunction] = None,
    ) -> "HyperLogLog[T]":
        """
        Create the most precise estimator whose estimated size fits in memory_bytes.

        Raises:
            ValueError: If memory_bytes is not positive or too small for
                        the minimum precision.
        """
        if memory_bytes <= 0:
            raise ValueError("Memory limit must be positive")

        best: Optional[int] = None
        for precision in range(MIN_PRECISION, MAX_PRECISION + 1):
            size = cls(precision=precision, hash_func=hash_func).estimate_size()
            if size > memory_bytes:
                if best is None:
                    raise ValueError(
                        f"Memory limit of {memory_bytes} bytes is too small. "
                        f"Minimum size is approximately {size} bytes."
                    )
                break
            best = precision

        logger.debug("Memory limit %d bytes allows precision %d", memory_bytes, best)
        return cls(precision=best, hash_func=hash_func, memory_limit_bytes=memory_bytes)

    def get_register_values(self) -> List[int]:
        """Return a copy of the current register values."""
        return list(self._registers)

    def error_bounds(self) -> Dict[str, float]:
        """
        Theoretical error bounds for this estimator.

        Returns:
            A dictionary with:
            - relative_error: the standard error 1.04/sqrt(m)
            - confidence_68pct: 1 sigma
            - confidence_95pct: 1.96 sigma
            - confidence_99pct: 2.58 sigma
        """
        bounds = super().error_bounds()
        std_error = 1.04 / math.sqrt(self._m)
        bounds.update(
            {
                "relative_error": std_error,
                "confidence_68pct": std_error,
                "confidence_95pct": std_error * 1.96,
                "confidence_99pct": std_error * 2.58,
            }
        )
        return bounds

    def estimate_size(self) -> int:
        """Estimated memory usage in bytes, dominated by the register array."""
        size = super().estimate_size()
        size += sys.getsizeof(self._precision)
        size += sys.getsizeof(self._m)
        size += sys.getsizeof(self._alpha)
        # getsizeof on array.array includes its buffer
        size += sys.getsizeof(self._registers)
        return size

    def get_stats(self) -> Dict[str, Any]:
        """
        Get detailed statistics about the estimator.

        Register distribution figures are only included once at least one
        item has been added.
        """
        stats = super().get_stats()
        stats.update(
            {
                "precision": self._precision,
                "num_registers": self._m,
                "alpha_value": self._alpha,
                "memory_usage": self.estimate_size(),
            }
        )

        if not self.is_empty:
            register_values = list(self._registers)
            empty_registers = register_values.count(0)
            max_register = max(register_values)
            max_rank = HASH_BITS - self._precision + 1

            distribution: Dict[str, int] = {}
            for value in register_values:
                # String keys keep the stats JSON friendly
                distribution[str(value)] = distribution.get(str(value), 0) + 1

            stats.update(
                {
                    "empty_registers": empty_registers,
                    "empty_registers_pct": empty_registers / self._m * 100,
                    "max_register_value": max_register,
                    "avg_register_value": sum(register_values) / self._m,
                    "register_value_distribution": distribution,
                    "theoretical_max_rank": max_rank,
                    "saturation_pct": max_register / max_rank * 100,
                }
            )

        return stats

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(precision={self._precision}, "
            f"items_processed={self._items_processed})"
        )
