"""
Distribution Statistics Tests
"""

import sys
import os
import math
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from hashring import HashRing, compute_stats


def test_stats_from_counts():
    stats = compute_stats({"a": 2, "b": 4, "c": 6})

    assert stats.node_count == 3
    assert stats.total_keys == 12
    assert stats.mean == pytest.approx(4.0)
    assert stats.variance == pytest.approx(8 / 3)
    assert stats.stddev == pytest.approx(math.sqrt(8 / 3))
    assert stats.min_keys == 2
    assert stats.max_keys == 6
    assert stats.imbalance == pytest.approx(1.5)


def test_stats_from_grouped_keys():
    stats = compute_stats({"a": ["k1", "k2"], "b": ["k3"]})
    assert stats.total_keys == 3
    assert stats.max_keys == 2


def test_nodes_without_keys_count_as_zero():
    stats = compute_stats({"a": 4}, nodes=["a", "b"])
    assert stats.node_count == 2
    assert stats.min_keys == 0
    assert stats.mean == pytest.approx(2.0)


def test_empty_distribution():
    stats = compute_stats({})
    assert stats.node_count == 0
    assert stats.imbalance == 0.0


def test_more_virtual_nodes_lower_variance():
    """Spreading each node over more positions evens out the load."""
    nodes = ["node-1", "node-2", "node-3", "node-4", "node-5"]
    keys = [f"key-{i}" for i in range(10000)]

    variances = {}
    for virtual_nodes in (1, 100):
        ring = HashRing(virtual_nodes=virtual_nodes, nodes=nodes)
        stats = compute_stats(ring.get_key_distribution(keys), nodes=nodes)
        assert stats.total_keys == len(keys)
        variances[virtual_nodes] = stats.variance

    assert variances[100] < variances[1]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
