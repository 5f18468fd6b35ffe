"""
Configuration for the consistent hashing ring.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfigError


class HashAlgorithm(Enum):
    """Digest used to place keys and virtual nodes on the ring."""
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    BLAKE2B = "blake2b"

    @property
    def digest_bits(self) -> int:
        return _DIGEST_BITS[self]


_DIGEST_BITS = {
    HashAlgorithm.MD5: 128,
    HashAlgorithm.SHA1: 160,
    HashAlgorithm.SHA256: 256,
    HashAlgorithm.BLAKE2B: 512,
}

MAX_HASH_BITS = 128


class DuplicatePolicy(Enum):
    """What add_node does for a node that is already present."""
    IGNORE = "IGNORE"     # Second add is a no-op
    REJECT = "REJECT"     # Raise DuplicateNodeError


@dataclass(frozen=True)
class RingConfig:
    """Configuration for a single hash ring."""
    virtual_nodes: int = 3  # Ring positions per physical node

    # Hash settings
    hash_algorithm: HashAlgorithm = HashAlgorithm.MD5
    hash_bits: int = 64  # Leading digest bits kept per position

    duplicate_policy: DuplicatePolicy = DuplicatePolicy.IGNORE

    def __post_init__(self):
        """Validate settings."""
        try:
            if isinstance(self.hash_algorithm, str):
                object.__setattr__(self, "hash_algorithm", HashAlgorithm(self.hash_algorithm.lower()))
            if isinstance(self.duplicate_policy, str):
                object.__setattr__(self, "duplicate_policy", DuplicatePolicy(self.duplicate_policy.upper()))
        except ValueError as e:
            raise InvalidConfigError(str(e)) from e

        if (not isinstance(self.virtual_nodes, int)
                or isinstance(self.virtual_nodes, bool)
                or self.virtual_nodes < 1):
            raise InvalidConfigError(
                f"virtual_nodes must be a positive integer, got {self.virtual_nodes!r}"
            )

        if (not isinstance(self.hash_bits, int)
                or isinstance(self.hash_bits, bool)
                or not 1 <= self.hash_bits <= MAX_HASH_BITS):
            raise InvalidConfigError(
                f"hash_bits must be between 1 and {MAX_HASH_BITS}, got {self.hash_bits!r}"
            )

        if self.hash_bits > self.hash_algorithm.digest_bits:
            raise InvalidConfigError(
                f"{self.hash_algorithm.value} produces only "
                f"{self.hash_algorithm.digest_bits} bits"
            )


def get_default_config(**overrides) -> RingConfig:
    """Get default ring configuration, with optional field overrides."""
    return RingConfig(**overrides)
