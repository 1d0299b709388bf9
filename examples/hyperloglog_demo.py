"""
HyperLogLog Example for tiny-hll.

Feeds random integers to an estimator, keeps an exact set alongside it and
compares the two counts at the end.
"""

import logging
import random
import sys
import time

from tiny_hll import HyperLogLog


def demonstrate_random_stream(precision=8, numbers_exp=5, max_value_exp=12):
    """Estimate the distinct count of a stream of random integers."""
    print("\n=== Random Stream Demo ===")

    numbers = 10**numbers_exp
    max_value = 10**max_value_exp

    hll = HyperLogLog(precision=precision)
    exact = set()
    print(
        f"Using precision p={hll.precision} "
        f"(error ~{hll.error_bounds()['relative_error']:.2%})"
    )

    start_time = time.time()
    for i in range(numbers):
        value = random.randint(0, max_value)
        hll.add(value)
        exact.add(value)

        if i and i % (numbers // 5) == 0:
            print(f"  Processed {i:,} items, current estimate: {hll.estimate():,.2f}")

    estimate = hll.estimate()
    correct = len(exact)
    error = abs(estimate - correct) / correct

    print(f"\nCardinality from exact set: {correct:,}")
    print(f"Cardinality estimated with HyperLogLog: {estimate:,.2f}")
    print(f"Error: {error:.2%}")
    print(f"Elapsed: {time.time() - start_time:.1f}s")
    print(f"Memory usage: {hll.estimate_size():,} bytes")
    print(f"Memory for exact storage (set): {sys.getsizeof(exact):,} bytes")


def demonstrate_precision_comparison():
    """Compare estimates across precision values on the same data."""
    print("\n=== Precision Comparison Demo ===")

    n_unique = 50000
    print("\nPrecision  Estimate     Actual Error  Memory Usage   Theoretical Error")
    print("----------------------------------------------------------------------")
    for p in [4, 6, 8, 10, 12, 14, 16]:
        hll = HyperLogLog(precision=p)
        for i in range(n_unique):
            hll.add(f"item-{i}")

        estimate = hll.estimate()
        rel_error = abs(estimate - n_unique) / n_unique
        theoretical_error = hll.error_bounds()["relative_error"]
        print(
            f"p = {p:2d}     {estimate:11,.1f}  {rel_error:8.4%}      "
            f"{hll.estimate_size():7,} bytes  {theoretical_error:.4%}"
        )


def demonstrate_small_cardinality():
    """Show the raw estimator's behaviour on nearly empty registers."""
    print("\n=== Small Cardinality Demo ===")

    hll = HyperLogLog(precision=10)
    print(f"Empty estimator reports {hll.estimate():.1f} (alpha * m)")
    for i in range(10):
        hll.add(i)
    print(f"After 10 distinct items: {hll.estimate():.1f}")
    print("Without linear counting the raw formula is biased for small counts.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    demonstrate_random_stream()
    demonstrate_precision_comparison()
    demonstrate_small_cardinality()
