"""
Seed stream: input string → reproducible floats in [0, 1).
FNV-1a (32-bit) feeds a Mulberry32 generator. No entropy source, clock or
platform-dependent rounding may enter this path.
"""
from typing import Callable

_MASK32 = 0xFFFFFFFF
FNV_OFFSET = 0x811C9DC5
FNV_PRIME = 0x01000193
MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """32-bit wrapped multiply (unsigned result)."""
    return (a * b) & _MASK32


def _code_units(value: str):
    """Yield UTF-16 code units; astral characters become surrogate pairs."""
    for ch in value:
        cp = ord(ch)
        if cp > 0xFFFF:
            cp -= 0x10000
            yield 0xD800 | (cp >> 10)
            yield 0xDC00 | (cp & 0x3FF)
        else:
            yield cp


def normalize(value: str) -> str:
    return value.strip().lower()


def fnv1a(value: str) -> int:
    """FNV-1a 32-bit hash of the string's UTF-16 code units."""
    h = FNV_OFFSET
    for unit in _code_units(value):
        h ^= unit
        h = _imul(h, FNV_PRIME)
    return h


def seeded_rng(seed: int) -> Callable[[], float]:
    """Mulberry32: return a generator function of floats in [0, 1)."""
    state = seed & _MASK32

    def next_value() -> float:
        nonlocal state
        state = (state + MULBERRY_INCREMENT) & _MASK32
        t = _imul(state ^ (state >> 15), 1 | state)
        t = ((t + _imul(t ^ (t >> 7), 61 | t)) & _MASK32) ^ t
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    return next_value


def hash_to_seeds(value: str, count: int) -> list[float]:
    """Draw `count` seed values for a (trimmed, lowercased) input string."""
    rng = seeded_rng(fnv1a(normalize(value)))
    return [rng() for _ in range(max(0, count))]
