import sys
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from dense_dijkstra.errors import IndexOutOfRange, InvalidCost, InvalidSize

# Cost stored for a missing edge (also the value used in graph files)
NO_EDGE: int = -1
# Legacy cap on the vertex count. Storage is resizable, so this is only a
# sanity check on input; pass max_nodes=None to lift it.
MAX_NODES: int = 128


def is_index(value) -> bool:
    """True for ints (including numpy integers) but not bools."""
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class DenseGraph:
    """Directed, weighted graph stored as a flattened square cost matrix.

    Entry ``u * vertex_count + v`` holds the cost of the edge u -> v, or
    NO_EDGE. The matrix is row-major so that loading a graph file is a
    straight walk over the flattened slots (see set_linear).
    """

    def __init__(self, vertex_count: int, max_nodes: Optional[int] = MAX_NODES):
        if not is_index(vertex_count) or vertex_count <= 0:
            raise InvalidSize(
                f"Vertex count must be a positive integer, got {vertex_count!r}."
            )
        if max_nodes is not None and vertex_count >= max_nodes:
            raise InvalidSize(
                f"Vertex count {vertex_count} must be below the maximum of {max_nodes}."
            )
        self._n = int(vertex_count)
        self._costs = np.full(self._n * self._n, NO_EDGE, dtype=np.int64)
        # any simple path has at most n - 1 edges, so with every |cost| at or
        # below this bound no path sum reaches sys.maxsize (the INF of dijkstra)
        self._max_cost = (sys.maxsize - 1) // max(self._n - 1, 1)

    @classmethod
    def from_matrix(
        cls, rows: Sequence[Sequence[int]], max_nodes: Optional[int] = MAX_NODES
    ) -> "DenseGraph":
        """Build a graph from a square nested sequence of costs."""
        n = len(rows)
        if n == 0 or any(not hasattr(row, "__len__") or len(row) != n for row in rows):
            raise InvalidSize(f"Cost matrix must be square: {n} rows of {n} costs each.")
        graph = cls(n, max_nodes=max_nodes)
        for u, row in enumerate(rows):
            for v, cost in enumerate(row):
                graph.set_edge(u, v, cost)
        return graph

    @property
    def vertex_count(self) -> int:
        return self._n

    @property
    def max_cost(self) -> int:
        """Largest cost magnitude an edge may have in this graph."""
        return self._max_cost

    def _check_cost(self, cost) -> int:
        if not is_index(cost):
            raise InvalidCost(f"Edge cost must be an integer, got {cost!r}.")
        if abs(int(cost)) > self._max_cost:
            raise InvalidCost(
                f"Edge cost {cost} exceeds the limit of {self._max_cost} "
                f"for a graph of {self._n} vertices."
            )
        return int(cost)

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return f"DenseGraph(vertex_count={self._n}, edges={self.edge_count()})"

    def _slot(self, u: int, v: int) -> int:
        for x in (u, v):
            if not is_index(x) or not 0 <= x < self._n:
                raise IndexOutOfRange(
                    f"Vertex {x!r} out of range [0, {self._n}) for edge ({u!r}, {v!r})."
                )
        return self._n * int(u) + int(v)

    def get_edge(self, u: int, v: int) -> int:
        """Cost of the edge u -> v, or NO_EDGE if there is none."""
        return int(self._costs[self._slot(u, v)])

    def set_edge(self, u: int, v: int, cost: int):
        self._costs[self._slot(u, v)] = self._check_cost(cost)

    def set_linear(self, i: int, cost: int):
        """Write the i-th flattened slot. Used while loading serialized input."""
        size = self._n * self._n
        if not is_index(i) or not 0 <= i < size:
            raise IndexOutOfRange(f"Slot {i!r} out of range [0, {size}).")
        self._costs[i] = self._check_cost(cost)

    def has_edge(self, u: int, v: int) -> bool:
        return self.get_edge(u, v) != NO_EDGE

    def neighbors(self, u: int) -> List[Tuple[int, int]]:
        """(v, cost) for every real edge leaving u, in ascending v."""
        start = self._slot(u, 0)
        row = self._costs[start : start + self._n]
        return [(int(v), int(row[v])) for v in np.flatnonzero(row != NO_EDGE)]

    def edges(self) -> Iterator[Tuple[int, int, int]]:
        for slot in np.flatnonzero(self._costs != NO_EDGE):
            u, v = divmod(int(slot), self._n)
            yield u, v, int(self._costs[slot])

    def edge_count(self) -> int:
        return int(np.count_nonzero(self._costs != NO_EDGE))

    def to_matrix(self) -> np.ndarray:
        """Copy of the costs as an N x N array."""
        return self._costs.reshape(self._n, self._n).copy()
