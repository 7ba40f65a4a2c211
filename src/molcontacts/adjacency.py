"""CSR adjacency from features to the contacts touching them."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class AdjacencyList:
    """Contacts incident to each node.

    ``edge_ids[offsets[i]:offsets[i + 1]]`` are the contact ids touching
    node ``i``, ascending.
    """

    offsets: np.ndarray  # (node_count + 1,)
    edge_ids: np.ndarray  # (2 * edge_count,)

    @property
    def node_count(self) -> int:
        return len(self.offsets) - 1

    def edges_of(self, node: int) -> np.ndarray:
        return self.edge_ids[self.offsets[node] : self.offsets[node + 1]]


def create_adjacency_list(
    index1: np.ndarray,
    index2: np.ndarray,
    edge_count: int,
    node_count: int,
) -> AdjacencyList:
    """Build the adjacency by counting sort: degrees, prefix sums, scatter."""
    a = np.asarray(index1[:edge_count], dtype=np.int64)
    b = np.asarray(index2[:edge_count], dtype=np.int64)

    degree = np.bincount(a, minlength=node_count) + np.bincount(b, minlength=node_count)

    offsets = np.zeros(node_count + 1, dtype=np.int64)
    np.cumsum(degree, out=offsets[1:])

    cursor = offsets[:-1].copy()
    edge_ids = np.zeros(2 * edge_count, dtype=np.int64)
    for k, (i, j) in enumerate(zip(a.tolist(), b.tolist())):
        edge_ids[cursor[i]] = k
        cursor[i] += 1
        edge_ids[cursor[j]] = k
        cursor[j] += 1

    return AdjacencyList(offsets=offsets, edge_ids=edge_ids)
