"""
Rebalance planning: which keys change owner on a membership change.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import EmptyRingError
from .consistent_hash import HashRing

logger = logging.getLogger(__name__)


@dataclass
class KeyMove:
    """A single key changing owner."""
    key: str
    source: Optional[str]  # None when the key had no owner before
    target: str


@dataclass
class RebalancePlan:
    """Key movements between two ring states."""
    moves: List[KeyMove] = field(default_factory=list)
    total_keys: int = 0

    @property
    def moved_count(self) -> int:
        return len(self.moves)

    @property
    def moved_fraction(self) -> float:
        if self.total_keys == 0:
            return 0.0
        return self.moved_count / self.total_keys

    def by_route(self) -> Dict[Tuple[Optional[str], str], List[str]]:
        """Group moved keys by (source, target)."""
        routes: Dict[Tuple[Optional[str], str], List[str]] = {}
        for move in self.moves:
            routes.setdefault((move.source, move.target), []).append(move.key)
        return routes


def diff_distributions(keys: Iterable[str], before: HashRing,
                       after: HashRing) -> RebalancePlan:
    """
    Compare key ownership between two rings.

    Args:
        keys: Keys to compare
        before: Ring state before the change (may be empty)
        after: Ring state after the change

    Returns:
        Plan listing every key whose owner differs
    """
    keys = list(keys)
    after_owners = _owners(keys, after)
    before_owners = _owners(keys, before) if before.get_node_count() else {}

    plan = RebalancePlan(total_keys=len(keys))
    for key in keys:
        source = before_owners.get(key)
        target = after_owners[key]
        if source != target:
            plan.moves.append(KeyMove(key=key, source=source, target=target))
    return plan


def _owners(keys: List[str], ring: HashRing) -> Dict[str, str]:
    return {
        key: node
        for node, node_keys in ring.distribute_keys(keys).items()
        for key in node_keys
    }


def plan_add_node(ring: HashRing, node: str, keys: Iterable[str]) -> RebalancePlan:
    """
    Plan the key movement caused by adding a node.

    The given ring is not modified.
    """
    after = ring.copy()
    after.add_node(node)
    plan = diff_distributions(keys, ring, after)
    logger.debug("Adding %s moves %d of %d keys", node, plan.moved_count, plan.total_keys)
    return plan


def plan_remove_node(ring: HashRing, node: str, keys: Iterable[str]) -> RebalancePlan:
    """
    Plan the key movement caused by removing a node.

    The given ring is not modified.

    Raises:
        EmptyRingError: If removing the node leaves the ring empty
    """
    after = ring.copy()
    after.remove_node(node)
    if after.get_node_count() == 0:
        raise EmptyRingError(f"Removing {node} leaves no node to take its keys")
    plan = diff_distributions(keys, ring, after)
    logger.debug("Removing %s moves %d of %d keys", node, plan.moved_count, plan.total_keys)
    return plan
