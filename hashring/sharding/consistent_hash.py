"""
Consistent hashing ring for key distribution.
"""

import bisect
import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Set

from ..config import DuplicatePolicy, RingConfig
from ..errors import DuplicateNodeError, EmptyRingError, InvalidConfigError
from .hashing import make_hasher, virtual_node_label

logger = logging.getLogger(__name__)


class HashRing:
    """
    Consistent hashing ring for distributing keys across nodes.

    Each node is placed on the ring at ``virtual_nodes`` positions, obtained
    by hashing ``"{node}#{i}"``. A key belongs to the node owning the first
    position at or after the key's hash, wrapping to the smallest position.

    Features:
    - Virtual nodes for better distribution
    - O(log n) lookups, binary-search removal
    - Minimal key movement on node changes

    All operations take the ring's lock; batch lookups hold it for the
    whole batch.

    Two virtual-node labels hashing to the same position is treated as an
    overwrite: the later insertion owns the position.
    """

    def __init__(self, virtual_nodes: int = 3, config: Optional[RingConfig] = None,
                 nodes: Optional[Iterable[str]] = None):
        # Snapshot; remove_node recomputes positions from these settings
        self._config = replace(config) if config is not None else RingConfig(
            virtual_nodes=virtual_nodes
        )
        self._virtual_nodes = self._config.virtual_nodes
        self._hash = make_hasher(self._config.hash_algorithm, self._config.hash_bits)

        self._positions: List[int] = []  # sorted ring positions
        self._owners: Dict[int, str] = {}  # position -> node
        self._nodes: Set[str] = set()
        self._lock = threading.RLock()

        for node in nodes or ():
            self.add_node(node)

    @property
    def config(self) -> RingConfig:
        return self._config

    @property
    def virtual_nodes(self) -> int:
        return self._virtual_nodes

    def hash(self, key: str) -> int:
        """Ring position of a key."""
        return self._hash(key)

    def _positions_for(self, node: str) -> List[int]:
        return [
            self._hash(virtual_node_label(node, i))
            for i in range(self._virtual_nodes)
        ]

    @staticmethod
    def _validate_node(node: str):
        if not isinstance(node, str) or not node:
            raise InvalidConfigError(f"Node label must be a non-empty string, got {node!r}")

    def add_node(self, node: str) -> None:
        """
        Add a node to the ring.

        Args:
            node: The node identifier

        Raises:
            InvalidConfigError: If the label is empty
            DuplicateNodeError: If the node is present and the ring rejects duplicates
        """
        self._validate_node(node)
        positions = self._positions_for(node)

        with self._lock:
            if node in self._nodes:
                if self._config.duplicate_policy == DuplicatePolicy.REJECT:
                    raise DuplicateNodeError(node)
                logger.debug("Node %s already on ring, ignoring add", node)
                return

            self._nodes.add(node)

            for position in positions:
                owner = self._owners.get(position)
                if owner is None:
                    bisect.insort(self._positions, position)
                elif owner != node:
                    logger.warning(
                        "Position %d of node %s collides with node %s; %s now owns it",
                        position, node, owner, node
                    )
                self._owners[position] = node

        logger.info("Added node %s with %d virtual nodes", node, len(positions))

    def remove_node(self, node: str) -> None:
        """
        Remove a node from the ring.

        Removing a node that is not on the ring is a no-op.

        Args:
            node: The node identifier
        """
        with self._lock:
            if node not in self._nodes:
                logger.debug("Node %s not on ring, nothing to remove", node)
                return

            self._nodes.discard(node)

            for position in self._positions_for(node):
                # Skip positions taken over by a colliding node
                if self._owners.get(position) != node:
                    continue
                del self._owners[position]
                idx = bisect.bisect_left(self._positions, position)
                del self._positions[idx]

        logger.info("Removed node %s", node)

    def _lookup_index(self, key: str) -> int:
        if not self._positions:
            raise EmptyRingError("Cannot look up a key on an empty ring")

        idx = bisect.bisect_left(self._positions, self._hash(key))
        if idx == len(self._positions):
            idx = 0  # Wrap around
        return idx

    def get_node(self, key: str) -> str:
        """
        Get the node responsible for a key.

        Args:
            key: The key to look up

        Returns:
            Node ID

        Raises:
            EmptyRingError: If the ring has no nodes
        """
        with self._lock:
            return self._owners[self._positions[self._lookup_index(key)]]

    def get_nodes(self, key: str, count: int) -> List[str]:
        """
        Get multiple nodes for a key (for replication).

        Walks the ring clockwise from the key's position, collecting
        distinct physical nodes.

        Args:
            key: The key to look up
            count: Number of nodes to return

        Returns:
            List of node IDs, at most ``count`` and at most the node count
        """
        if count < 1:
            raise InvalidConfigError(f"count must be at least 1, got {count}")

        with self._lock:
            idx = self._lookup_index(key)

            nodes = []
            seen = set()

            for i in range(len(self._positions)):
                ring_idx = (idx + i) % len(self._positions)
                node = self._owners[self._positions[ring_idx]]

                if node not in seen:
                    nodes.append(node)
                    seen.add(node)

                    if len(nodes) >= count:
                        break

            return nodes

    def distribute_keys(self, keys: Iterable[str]) -> Dict[str, List[str]]:
        """
        Group keys by owning node.

        Keys keep their input order within each node's group. The whole
        batch is resolved against a single ring state.

        Args:
            keys: Keys to place

        Returns:
            Dict of node_id -> keys owned by that node
        """
        distribution: Dict[str, List[str]] = {}
        with self._lock:
            if not self._positions:
                raise EmptyRingError("Cannot distribute keys on an empty ring")
            for key in keys:
                node = self._owners[self._positions[self._lookup_index(key)]]
                distribution.setdefault(node, []).append(key)
        return distribution

    def get_key_distribution(self, sample_keys: Iterable[str]) -> Dict[str, int]:
        """
        Get distribution of keys across nodes.

        Args:
            sample_keys: List of keys to check

        Returns:
            Dict of node_id -> key count
        """
        return {
            node: len(keys)
            for node, keys in self.distribute_keys(sample_keys).items()
        }

    def get_all_nodes(self) -> List[str]:
        """Get all physical nodes, sorted."""
        with self._lock:
            return sorted(self._nodes)

    def get_node_count(self) -> int:
        """Get number of physical nodes."""
        with self._lock:
            return len(self._nodes)

    def positions_of(self, node: str) -> List[int]:
        """Get the ring positions currently owned by a node."""
        with self._lock:
            if node not in self._nodes:
                return []
            return sorted({
                position for position in self._positions_for(node)
                if self._owners.get(position) == node
            })

    def get_ring_state(self, limit: int = 20) -> List[Dict]:
        """Get current ring state for debugging."""
        with self._lock:
            return [
                {"hash": position, "node": self._owners[position]}
                for position in self._positions[:limit]
            ]

    def copy(self) -> "HashRing":
        """Get an independent ring with the same nodes and positions."""
        ring = HashRing(config=self._config)
        with self._lock:
            ring._positions = list(self._positions)
            ring._owners = dict(self._owners)
            ring._nodes = set(self._nodes)
        return ring

    def __len__(self) -> int:
        return self.get_node_count()

    def __contains__(self, node: object) -> bool:
        with self._lock:
            return node in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self.get_all_nodes())

    def __repr__(self) -> str:
        return (
            f"HashRing(nodes={self.get_all_nodes()!r}, "
            f"virtual_nodes={self._virtual_nodes})"
        )
