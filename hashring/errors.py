"""
Exceptions raised by the hash ring.
"""


class HashRingError(Exception):
    """Base class for hash ring errors."""
    pass


class InvalidConfigError(HashRingError, ValueError):
    """Raised for an unusable ring configuration or node label."""
    pass


class EmptyRingError(HashRingError, LookupError):
    """Raised when a lookup is attempted on a ring with no nodes."""
    pass


class DuplicateNodeError(HashRingError, ValueError):
    """Raised when adding a node that is already on the ring."""

    def __init__(self, node: str):
        super().__init__(f"Node '{node}' is already on the ring")
        self.node = node
