"""
Load statistics for a key distribution.
"""

import statistics
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union


@dataclass
class DistributionStats:
    """Statistics for keys spread across nodes."""
    node_count: int = 0
    total_keys: int = 0
    mean: float = 0.0
    variance: float = 0.0  # population variance of per-node key counts
    stddev: float = 0.0
    min_keys: int = 0
    max_keys: int = 0
    imbalance: float = 0.0  # max_keys / mean


def compute_stats(distribution: Mapping[str, Union[int, Sequence[str]]],
                  nodes: Optional[Iterable[str]] = None) -> DistributionStats:
    """
    Compute load statistics.

    Args:
        distribution: Either node -> key count or node -> keys
        nodes: All nodes to account for; nodes missing from the
            distribution count as holding zero keys

    Returns:
        DistributionStats
    """
    counts: Dict[str, int] = {
        node: value if isinstance(value, int) else len(value)
        for node, value in distribution.items()
    }
    for node in nodes or ():
        counts.setdefault(node, 0)

    values: List[int] = list(counts.values())
    if not values:
        return DistributionStats()

    mean = statistics.fmean(values)
    variance = statistics.pvariance(values)
    return DistributionStats(
        node_count=len(values),
        total_keys=sum(values),
        mean=mean,
        variance=variance,
        stddev=variance ** 0.5,
        min_keys=min(values),
        max_keys=max(values),
        imbalance=max(values) / mean if mean else 0.0,
    )
