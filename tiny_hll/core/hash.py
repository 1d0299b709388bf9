"""
32-bit hash functions for tiny-hll.

HyperLogLog needs a deterministic, uniformly distributing 32-bit hash. The
functions here are pure Python and need no external dependencies. Any callable
matching ``HashFunction`` can be passed to an estimator instead.
"""

from typing import Any, Callable, Iterable

HashFunction = Callable[[Any], int]

_MASK_32 = 0xFFFFFFFF

# MurmurHash3 x86_32 constants
_C1 = 0xCC9E2D51
_C2 = 0x1B873593


def _join(parts: Iterable[bytes]) -> bytes:
    """Length-prefix each part so concatenations cannot run together."""
    return b"".join(len(part).to_bytes(4, "little") + part for part in parts)


def _encode(key: Any) -> bytes:
    """
    Type-tagged encoding used for values that are not str or bytes.

    - ``bool``, ``int`` and integral ``float`` values share one decimal
      encoding, so ``1``, ``1.0`` and ``True`` are the same item, as they
      are for ``==``. Other floats use ``repr()``.
    - ``set``/``frozenset`` and ``dict`` sort their encoded elements, so
      the result does not depend on iteration order or ``PYTHONHASHSEED``.
    - ``tuple`` and ``list`` keep element order and are distinct from each
      other.
    - Anything else goes through ``repr()``, which must be stable across
      processes for the hash to be.
    """
    if isinstance(key, str):
        return b"s" + key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return b"b" + bytes(key)
    if isinstance(key, int):
        return b"n" + str(int(key)).encode("ascii")
    if isinstance(key, float):
        if key.is_integer():
            return b"n" + str(int(key)).encode("ascii")
        return b"n" + repr(key).encode("ascii")
    if isinstance(key, (set, frozenset)):
        return b"S" + _join(sorted(_encode(element) for element in key))
    if isinstance(key, dict):
        pairs = (_join((_encode(k), _encode(v))) for k, v in key.items())
        return b"D" + _join(sorted(pairs))
    if isinstance(key, tuple):
        return b"T" + _join(_encode(element) for element in key)
    if isinstance(key, list):
        return b"L" + _join(_encode(element) for element in key)
    return b"r" + repr(key).encode("utf-8")


def _to_bytes(key: Any) -> bytes:
    """
    Canonical byte encoding of a key.

    Strings are UTF-8 encoded and bytes-like values are used as they are,
    so ``"abc"`` and ``b"abc"`` hash alike. Everything else is encoded by
    ``_encode``.
    """
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    return _encode(key)


def _rotl32(x: int, r: int) -> int:
    return ((x << r) | (x >> (32 - r))) & _MASK_32


def _mix_block(k: int) -> int:
    k = (k * _C1) & _MASK_32
    k = _rotl32(k, 15)
    return (k * _C2) & _MASK_32


def murmurhash3_32(key: Any, seed: int = 0) -> int:
    """
    MurmurHash3 (x86, 32-bit variant).

    Fast, well distributed and with a strong avalanche effect, which makes it
    the default hash for HyperLogLog estimators.

    Args:
        key: The key to hash (see ``_to_bytes`` for the encoding).
        seed: Optional seed for the hash.

    Returns:
        Unsigned 32-bit hash value.
    """
    data = _to_bytes(key)
    length = len(data)
    tail_start = length - (length & 3)

    h = seed & _MASK_32
    for offset in range(0, tail_start, 4):
        h ^= _mix_block(int.from_bytes(data[offset : offset + 4], "little"))
        h = _rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK_32

    if length & 3:
        h ^= _mix_block(int.from_bytes(data[tail_start:], "little"))

    # fmix32
    h ^= length
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK_32
    h ^= h >> 16
    return h


def fnv1a_32(key: Any, seed: int = 0) -> int:
    """
    FNV-1a (32-bit variant).

    Simpler than MurmurHash3 but with a weaker avalanche effect, so estimates
    built on it tend to be less accurate.
    """
    h = (2166136261 ^ seed) & _MASK_32
    for byte in _to_bytes(key):
        h = ((h ^ byte) * 16777619) & _MASK_32
    return h


# Default hash used by estimators
hash32: HashFunction = murmurhash3_32
