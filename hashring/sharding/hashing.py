"""
Hash functions for placing keys and virtual nodes on the ring.
"""

import hashlib
from typing import Callable

from ..config import HashAlgorithm
from ..errors import InvalidConfigError


def _check_bits(algorithm: HashAlgorithm, bits: int):
    if (not isinstance(bits, int) or isinstance(bits, bool)
            or not 1 <= bits <= algorithm.digest_bits):
        raise InvalidConfigError(
            f"bits must be between 1 and {algorithm.digest_bits} "
            f"for {algorithm.value}, got {bits!r}"
        )


def hash_key(key: str, algorithm: HashAlgorithm = HashAlgorithm.MD5,
             bits: int = 64) -> int:
    """
    Hash a string to a ring position.

    Args:
        key: String to hash
        algorithm: Digest algorithm
        bits: Number of leading digest bits to keep

    Returns:
        Unsigned integer in [0, 2**bits)

    Raises:
        InvalidConfigError: If bits is outside 1..digest width
    """
    _check_bits(algorithm, bits)
    digest = hashlib.new(algorithm.value, key.encode("utf-8")).digest()
    return int.from_bytes(digest, "big") >> (len(digest) * 8 - bits)


def make_hasher(algorithm: HashAlgorithm = HashAlgorithm.MD5,
                bits: int = 64) -> Callable[[str], int]:
    """Get a single-argument hash function with fixed settings."""
    _check_bits(algorithm, bits)

    def _hasher(key: str) -> int:
        digest = hashlib.new(algorithm.value, key.encode("utf-8")).digest()
        return int.from_bytes(digest, "big") >> (len(digest) * 8 - bits)
    return _hasher


def virtual_node_label(node: str, index: int) -> str:
    """Label hashed to produce a node's index-th ring position."""
    return f"{node}#{index}"


def max_position(bits: int = 64) -> int:
    """Largest ring position for a given hash width."""
    return (1 << bits) - 1
