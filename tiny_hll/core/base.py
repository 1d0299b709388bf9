"""
Base classes and interfaces for tiny-hll estimators.

This module defines the abstract interface that estimators implement, along
with the shared bookkeeping used for sizing and statistics reporting.
"""

import abc
import sys
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")  # Type for the items being processed
R = TypeVar("R")  # Type for the result of queries


class StreamSummary(Generic[T, R], abc.ABC):
    """
    Abstract base class for streaming summaries.

    A summary consumes items one at a time through ``add`` and answers
    questions about the stream seen so far through ``query``.
    """

    def __init__(self, memory_limit_bytes: Optional[int] = None):
        """
        Args:
            memory_limit_bytes: Size budget checked by ``check_memory_limit``.
                                Summaries never enforce it on their own.
        """
        self._memory_limit_bytes = memory_limit_bytes
        self._items_processed = 0

    @abc.abstractmethod
    def add(self, item: T) -> None:
        """
        Update the summary with a new item from the stream.

        Implementations call ``super().add(item)`` once the item has been
        accepted, which keeps ``items_processed`` in step.
        """
        self._items_processed += 1

    @abc.abstractmethod
    def query(self, *args: Any, **kwargs: Any) -> R:
        """Query the current state of the summary."""

    def estimate_size(self) -> int:
        """
        Estimate the current memory usage of this summary in bytes.

        The base implementation counts the object and its instance dictionary.
        Derived classes add their own data structures.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        return size

    def check_memory_limit(self) -> bool:
        """Compare ``estimate_size()`` with the budget given at construction.

        Always True when no budget was set.
        """
        if self._memory_limit_bytes is None:
            return True

        return self.estimate_size() <= self._memory_limit_bytes

    def error_bounds(self) -> Dict[str, float]:
        """
        Theoretical error bounds for this summary.

        The base implementation has none and returns an empty dictionary.
        """
        return {}

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current state of the summary.

        Derived classes extend the dictionary returned here.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "items_processed": self._items_processed,
            "memory_bytes": self.estimate_size(),
        }

        if self._memory_limit_bytes is not None:
            stats["memory_limit_bytes"] = self._memory_limit_bytes
            stats["memory_usage_pct"] = (
                self.estimate_size() / self._memory_limit_bytes
            ) * 100

        stats.update(self.error_bounds())
        return stats

    @property
    def items_processed(self) -> int:
        """Get the total number of items processed by this summary."""
        return self._items_processed


class CardinalityEstimator(StreamSummary[T, float], abc.ABC):
    """
    Abstract base class for cardinality estimation algorithms.

    Examples include HyperLogLog and its variants.
    """

    @abc.abstractmethod
    def estimate(self) -> float:
        """Estimate the number of distinct items seen in the stream."""

    def query(self, *args: Any, **kwargs: Any) -> float:
        """Alias for ``estimate``."""
        return self.estimate()

    def get_stats(self) -> Dict[str, Any]:
        stats = super().get_stats()
        stats["estimated_cardinality"] = self.estimate()
        return stats
