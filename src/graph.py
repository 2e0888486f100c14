from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .pauli import Pauli


class Graph:
    """
    Simple undirected graph given by its adjacency matrix, describing the graph
    state obtained by applying CZ along every edge to |+>^n.

    Args:
        adjacency (array-like): Square, symmetric 0/1 matrix with zero diagonal.
    """

    def __init__(self, adjacency):
        A = np.asarray(adjacency)
        if A.ndim != 2 or A.shape[0] != A.shape[1]:
            raise ValueError(f"Adjacency matrix must be square, got shape {A.shape}")
        if np.any((A != 0) & (A != 1)):
            raise ValueError("Adjacency matrix entries must be 0 or 1")
        if np.any(A != A.T):
            raise ValueError("Adjacency matrix must be symmetric")
        if np.any(np.diag(A) != 0):
            raise ValueError("Adjacency matrix must have a zero diagonal (no self loops)")
        self._adjacency = A.astype(np.uint8)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int]]) -> "Graph":
        A = np.zeros((n, n), dtype=np.uint8)
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"Edge ({u}, {v}) is outside vertices 0..{n - 1}")
            if u == v:
                raise ValueError(f"Self loop on vertex {u} is not allowed")
            A[u, v] = A[v, u] = 1
        return cls(A)

    @classmethod
    def from_networkx(cls, graph) -> "Graph":
        """Build from a ``networkx.Graph``; vertices are relabelled 0..n-1 in sorted order."""
        import networkx as nx

        nodes = sorted(graph.nodes())
        A = nx.to_numpy_array(graph, nodelist=nodes, dtype=np.uint8, weight=None)
        return cls(A)

    def num_vertices(self) -> int:
        return self._adjacency.shape[0]

    def get_adjacency_matrix(self) -> np.ndarray:
        return self._adjacency.copy()

    def neighbors(self, vertex: int) -> List[int]:
        return [int(u) for u in np.flatnonzero(self._adjacency[vertex])]

    def edges(self) -> List[Tuple[int, int]]:
        rows, cols = np.nonzero(np.triu(self._adjacency))
        return [(int(u), int(v)) for u, v in zip(rows, cols)]

    def stabilizer_generators(self) -> List[Pauli]:
        """Canonical generators X_v * prod_{u ~ v} Z_u, one per vertex."""
        n = self.num_vertices()
        generators = []
        for v in range(n):
            pauli = Pauli.single_x(n, v)
            for u in self.neighbors(v):
                pauli.set_z(u, 1)
            generators.append(pauli)
        return generators

    def __eq__(self, other) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return np.array_equal(self._adjacency, other._adjacency)

    def __repr__(self) -> str:
        return f"Graph(n={self.num_vertices()}, edges={self.edges()})"


__all__ = ["Graph"]
