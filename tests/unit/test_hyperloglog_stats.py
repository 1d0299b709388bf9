"""
Unit tests for HyperLogLog statistics and sizing hooks.
"""

import json
import math
import unittest

from tiny_hll.algorithms.hyperloglog import HyperLogLog


class TestHyperLogLogStats(unittest.TestCase):
    """Test cases for HyperLogLog diagnostics."""

    def test_get_register_values(self):
        """Register values are returned as a copy."""
        precision = 8
        hll = HyperLogLog(precision=precision)

        registers = hll.get_register_values()
        self.assertEqual(len(registers), 2**precision)
        self.assertEqual(sum(registers), 0)

        for i in range(100):
            hll.add(f"item-{i}")

        registers_after = hll.get_register_values()
        self.assertEqual(len(registers_after), 2**precision)
        self.assertGreater(sum(registers_after), 0)

        registers_copy = hll.get_register_values()
        registers_copy[0] = 99
        self.assertNotEqual(hll.get_register_values()[0], 99)

    def test_get_stats_empty(self):
        hll = HyperLogLog(precision=10)

        stats = hll.get_stats()

        self.assertEqual(stats["type"], "HyperLogLog")
        self.assertEqual(stats["items_processed"], 0)
        self.assertEqual(stats["estimated_cardinality"], hll.estimate())
        self.assertEqual(stats["precision"], 10)
        self.assertEqual(stats["num_registers"], 1024)
        self.assertAlmostEqual(stats["alpha_value"], 0.7213 / (1 + 1.079 / 1024))
        self.assertGreater(stats["memory_usage"], 1024)

        # Register figures only appear once something was added
        self.assertNotIn("empty_registers", stats)
        self.assertNotIn("max_register_value", stats)

    def test_get_stats_with_data(self):
        hll = HyperLogLog(precision=8)
        for i in range(1000):
            hll.add(f"item-{i}")

        stats = hll.get_stats()

        self.assertEqual(stats["items_processed"], 1000)
        self.assertEqual(stats["num_registers"], 256)
        self.assertTrue(0 <= stats["empty_registers_pct"] <= 100)
        self.assertGreaterEqual(stats["max_register_value"], 1)
        self.assertLessEqual(stats["max_register_value"], stats["theoretical_max_rank"])
        self.assertEqual(stats["theoretical_max_rank"], 25)
        self.assertTrue(0 < stats["saturation_pct"] <= 100)

        distribution = stats["register_value_distribution"]
        self.assertEqual(sum(distribution.values()), 256)
        self.assertEqual(distribution.get("0", 0), stats["empty_registers"])

        for key in [
            "relative_error",
            "confidence_68pct",
            "confidence_95pct",
            "confidence_99pct",
        ]:
            self.assertIn(key, stats)

        # Stats are JSON friendly
        json.dumps(stats)

    def test_error_bounds(self):
        for precision in [4, 8, 12, 16]:
            bounds = HyperLogLog(precision=precision).error_bounds()
            expected_std_error = 1.04 / math.sqrt(2**precision)

            self.assertAlmostEqual(
                bounds["relative_error"], expected_std_error, places=10
            )
            self.assertAlmostEqual(
                bounds["confidence_68pct"], expected_std_error, places=10
            )
            self.assertAlmostEqual(
                bounds["confidence_95pct"], expected_std_error * 1.96, places=10
            )
            self.assertAlmostEqual(
                bounds["confidence_99pct"], expected_std_error * 2.58, places=10
            )

    def test_estimate_size(self):
        """Size is dominated by the registers and does not grow with items."""
        sizes = [HyperLogLog(precision=p).estimate_size() for p in range(4, 17)]
        for smaller, larger in zip(sizes, sizes[1:]):
            self.assertLess(smaller, larger)

        hll = HyperLogLog(precision=12)
        self.assertGreaterEqual(hll.estimate_size(), 4096)

        before = hll.estimate_size()
        for i in range(5000):
            hll.add(i)
        self.assertEqual(hll.estimate_size(), before)

    def test_check_memory_limit(self):
        self.assertTrue(HyperLogLog(precision=8).check_memory_limit())
        self.assertFalse(
            HyperLogLog(precision=8, memory_limit_bytes=100).check_memory_limit()
        )

        hll = HyperLogLog(precision=8, memory_limit_bytes=10**6)
        stats = hll.get_stats()
        self.assertEqual(stats["memory_limit_bytes"], 10**6)
        self.assertLess(stats["memory_usage_pct"], 100)

    def test_repr(self):
        hll = HyperLogLog(precision=5)
        hll.add("x")
        self.assertEqual(repr(hll), "HyperLogLog(precision=5, items_processed=1)")


if __name__ == "__main__":
    unittest.main()
