"""
Ring Hash Function Tests
"""

import sys
import os
import hashlib
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from hashring import HashAlgorithm, InvalidConfigError
from hashring.sharding.hashing import hash_key, make_hasher, virtual_node_label, max_position


def test_hash_is_deterministic():
    assert hash_key("user:42") == hash_key("user:42")
    assert hash_key("user:42") != hash_key("user:43")


def test_hash_keeps_leading_digest_bits():
    digest = hashlib.md5(b"NodeA#0").digest()
    assert hash_key("NodeA#0") == int.from_bytes(digest[:8], "big")
    assert hash_key("NodeA#0", bits=32) == int(hashlib.md5(b"NodeA#0").hexdigest()[:8], 16)


def test_hash_range():
    """Every hash fits in the configured width."""
    for algorithm in HashAlgorithm:
        for bits in (8, 32, 64, 128):
            value = hash_key("some key", algorithm, bits)
            assert 0 <= value <= max_position(bits)


def test_algorithms_differ():
    values = {hash_key("key", algorithm) for algorithm in HashAlgorithm}
    assert len(values) == len(HashAlgorithm)


def test_make_hasher():
    hasher = make_hasher(HashAlgorithm.SHA256, 48)
    assert hasher("abc") == hash_key("abc", HashAlgorithm.SHA256, 48)


def test_unicode_keys():
    assert hash_key("ключ") == hash_key("ключ")
    assert hash_key("ключ") != hash_key("key")


def test_virtual_node_label():
    assert virtual_node_label("NodeA", 0) == "NodeA#0"
    assert virtual_node_label("cache-1:6379", 12) == "cache-1:6379#12"


@pytest.mark.parametrize("bits", [0, -8, 129, 200])
def test_hash_width_out_of_range(bits):
    """Widths outside 1..digest size are rejected, not truncated or shifted."""
    with pytest.raises(InvalidConfigError):
        hash_key("key", HashAlgorithm.MD5, bits)
    with pytest.raises(InvalidConfigError):
        make_hasher(HashAlgorithm.MD5, bits)


def test_hash_width_up_to_digest_size():
    assert 0 <= hash_key("key", HashAlgorithm.SHA1, 160) <= max_position(160)
    with pytest.raises(InvalidConfigError):
        hash_key("key", HashAlgorithm.SHA1, 161)


def test_max_position():
    assert max_position(8) == 255
    assert max_position() == 2 ** 64 - 1


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
