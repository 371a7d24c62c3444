from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from .graph import ValveGraph


@dataclass(frozen=True)
class DistanceMatrix:
    """All-pairs hop counts over a valve graph.

    `weights[i, j]` is the number of tunnels walked from dense index `i` to
    `j`, or `inf` when `j` cannot be reached. The array is read-only.
    """
    weights: np.ndarray
    name_to_index: Dict[str, int]
    index_to_name: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.index_to_name)

    def index(self, name: str) -> int:
        return self.name_to_index[name]

    def distance(self, source: str, target: str) -> float:
        return float(self.weights[self.name_to_index[source], self.name_to_index[target]])

    def hop_rows(self) -> List[List[Optional[int]]]:
        """Plain nested lists of int hop counts, None where unreachable."""
        return [
            [int(d) if np.isfinite(d) else None for d in row]
            for row in self.weights
        ]


def build_distance_matrix(graph: ValveGraph) -> DistanceMatrix:
    """Floyd-Warshall over unit-weight tunnels.

    Dense indices follow the graph's record order.
    """
    index_to_name = tuple(graph)
    name_to_index = {name: i for i, name in enumerate(index_to_name)}
    n = len(index_to_name)

    weights = np.full((n, n), np.inf, dtype=float)
    for name, valve in graph.items():
        i = name_to_index[name]
        weights[i, i] = 0.0
        for neighbor in valve.tunnels:
            j = name_to_index[neighbor]
            if i != j:
                weights[i, j] = 1.0

    # from https://en.wikipedia.org/wiki/Floyd%E2%80%93Warshall_algorithm
    # the (i, j) loops are done as one broadcast per intermediate k
    for k in range(n):
        np.minimum(weights, weights[:, k, None] + weights[None, k, :], out=weights)

    weights.setflags(write=False)
    return DistanceMatrix(weights=weights, name_to_index=name_to_index, index_to_name=index_to_name)
