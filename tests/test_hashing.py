"""
Seed stream: determinism, normalization, range and sensitivity.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hashvatar.hashing import fnv1a, hash_to_seeds, seeded_rng


class TestFnv1a(unittest.TestCase):
    def test_known_vectors(self):
        """Standard FNV-1a 32-bit test vectors."""
        self.assertEqual(fnv1a(""), 0x811C9DC5)
        self.assertEqual(fnv1a("a"), 0xE40C292C)
        self.assertEqual(fnv1a("foobar"), 0xBF9CF968)

    def test_result_is_unsigned_32_bit(self):
        for s in ("x", "vitalik.eth", "0x" + "f" * 40, "ünïcødé", "🙂"):
            h = fnv1a(s)
            self.assertGreaterEqual(h, 0)
            self.assertLess(h, 2 ** 32)

    def test_astral_characters_hash_as_surrogate_pairs(self):
        self.assertEqual(fnv1a("🙂"), fnv1a("🙂"))


class TestSeededRng(unittest.TestCase):
    def test_same_seed_same_stream(self):
        a, b = seeded_rng(12345), seeded_rng(12345)
        self.assertEqual([a() for _ in range(50)], [b() for _ in range(50)])

    def test_different_seeds_differ(self):
        a, b = seeded_rng(1), seeded_rng(2)
        self.assertNotEqual([a() for _ in range(5)], [b() for _ in range(5)])


class TestHashToSeeds(unittest.TestCase):
    def test_deterministic(self):
        for s in ("", "a", "vitalik.eth", "0xAbC123", "  spaced  "):
            self.assertEqual(hash_to_seeds(s, 16), hash_to_seeds(s, 16))

    def test_trim_and_lowercase(self):
        self.assertEqual(hash_to_seeds(" S ", 8), hash_to_seeds("s", 8))
        self.assertEqual(hash_to_seeds("VITALIK.ETH", 8), hash_to_seeds("vitalik.eth", 8))

    def test_values_in_unit_interval(self):
        for s in ("a", "b", "satoshi", "0x" + "0" * 40):
            for v in hash_to_seeds(s, 200):
                self.assertGreaterEqual(v, 0.0)
                self.assertLess(v, 1.0)

    def test_one_character_changes_output(self):
        self.assertNotEqual(hash_to_seeds("abc", 4), hash_to_seeds("abd", 4))

    def test_length_and_prefix_stability(self):
        """A longer draw extends, never changes, a shorter one."""
        self.assertEqual(len(hash_to_seeds("x", 7)), 7)
        self.assertEqual(hash_to_seeds("x", 12)[:5], hash_to_seeds("x", 5))

    def test_zero_or_negative_count(self):
        self.assertEqual(hash_to_seeds("x", 0), [])
        self.assertEqual(hash_to_seeds("x", -3), [])


if __name__ == "__main__":
    unittest.main()
