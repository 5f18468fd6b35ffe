"""Sharding layer components."""

from .consistent_hash import HashRing
from .hashing import hash_key, make_hasher, virtual_node_label, max_position
from .rebalance import KeyMove, RebalancePlan, diff_distributions, plan_add_node, plan_remove_node
from .stats import DistributionStats, compute_stats

__all__ = [
    'HashRing',
    'hash_key',
    'make_hasher',
    'virtual_node_label',
    'max_position',
    'KeyMove',
    'RebalancePlan',
    'diff_distributions',
    'plan_add_node',
    'plan_remove_node',
    'DistributionStats',
    'compute_stats'
]
