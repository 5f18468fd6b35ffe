"""
hashring
A consistent hashing ring with virtual nodes for sharded caches and
partitioned storage.
"""

__version__ = "1.0.0"
__author__ = "The hashring Contributors"

from .config import RingConfig, HashAlgorithm, DuplicatePolicy, get_default_config
from .errors import HashRingError, InvalidConfigError, EmptyRingError, DuplicateNodeError
from .sharding import (
    HashRing, KeyMove, RebalancePlan, DistributionStats,
    hash_key, compute_stats, plan_add_node, plan_remove_node
)

__all__ = [
    # Config
    'RingConfig',
    'HashAlgorithm',
    'DuplicatePolicy',
    'get_default_config',
    # Errors
    'HashRingError',
    'InvalidConfigError',
    'EmptyRingError',
    'DuplicateNodeError',
    # Ring
    'HashRing',
    'hash_key',
    # Rebalancing
    'KeyMove',
    'RebalancePlan',
    'plan_add_node',
    'plan_remove_node',
    # Stats
    'DistributionStats',
    'compute_stats',
]
