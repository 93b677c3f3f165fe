import heapq
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from dense_dijkstra.errors import IndexOutOfRange, InvalidSource
from dense_dijkstra.graph import NO_EDGE, DenseGraph, is_index

# Value used as INFINITY for unreachable vertices
INF: int = sys.maxsize


class Frontier:
    """Vertices awaiting finalisation, ordered by (key, vertex).

    The key of a vertex is its current best distance, so whenever that
    distance changes the vertex has to be moved. upsert() does this as
    remove-then-insert; the heap keeps superseded entries around and
    extract_min() discards them, which keeps both operations O(log n).
    """

    def __init__(self):
        self._heap: List[Tuple[int, int]] = []
        self._keys: Dict[int, int] = {}  # vertex -> live key

    def __contains__(self, vertex: int) -> bool:
        return vertex in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __bool__(self) -> bool:
        return bool(self._keys)

    def upsert(self, vertex: int, key: int):
        """Insert vertex under key, replacing any entry it already has."""
        self._keys[vertex] = key
        heapq.heappush(self._heap, (key, vertex))

    def extract_min(self) -> int:
        """Remove and return the vertex with the smallest (key, vertex)."""
        while self._heap:
            key, vertex = heapq.heappop(self._heap)
            if self._keys.get(vertex) == key:
                del self._keys[vertex]
                return vertex
            # stale entry left behind by upsert
        raise IndexError("extract_min from an empty frontier")


@dataclass
class ShortestPaths:
    """Distance and predecessor tables produced by one dijkstra_algo run."""

    source: int
    dist: List[int]
    previous_node: List[Optional[int]]

    @property
    def vertex_count(self) -> int:
        return len(self.dist)

    def is_reachable(self, vertex: int) -> bool:
        return self.cost_to(vertex) != INF

    def cost_to(self, target: int) -> int:
        if not is_index(target) or not 0 <= target < len(self.dist):
            raise IndexOutOfRange(
                f"Target {target!r} out of range [0, {len(self.dist)})."
            )
        return self.dist[target]

    def path_to(self, target: int) -> List[int]:
        """Vertices from source to target, or [] if target is unreachable."""
        return reconstruct_path(self.previous_node, self.source, target)


def dijkstra_algo(
    graph: DenseGraph,
    source: int,
    dist: Optional[List[int]] = None,
    previous_node: Optional[List[Optional[int]]] = None,
    debug: bool = False,
) -> ShortestPaths:
    """Single-source shortest paths over a dense graph (Dijkstra).

    Vertices are finalised in increasing (distance, vertex) order, so among
    equal-cost alternatives the one through the lower-numbered vertex is
    recorded. Edge costs must be non-negative; negative costs are not
    detected and give meaningless results.

    Args:
        graph: The graph to search. Must not be modified during the call.
        source: Index of the source vertex.
        dist: Optional list of length vertex_count to fill with distances.
        previous_node: Optional list of length vertex_count to fill with
            predecessors.
        debug: Print every finalised vertex and relaxation.

    Returns:
        ShortestPaths holding the (possibly caller-supplied) tables.
        Unreachable vertices have distance INF and predecessor None.

    Raises:
        InvalidSource: source is not a vertex of graph. No table is touched.
    """
    n = graph.vertex_count
    if not is_index(source) or not 0 <= source < n:
        raise InvalidSource(f"Source vertex {source!r} out of range [0, {n}).")
    for name, table in (("dist", dist), ("previous_node", previous_node)):
        if table is not None and len(table) != n:
            raise ValueError(
                f"{name} table has length {len(table)}, expected {n} (one per vertex)."
            )

    if dist is None:
        dist = [INF] * n
    if previous_node is None:
        previous_node = [None] * n
    for i in range(n):
        dist[i] = INF
        previous_node[i] = None
    source = int(source)
    dist[source] = 0

    frontier = Frontier()
    frontier.upsert(source, 0)

    while frontier:
        # smallest (dist, vertex) in the frontier is final
        u = frontier.extract_min()
        if debug:
            print(f"[dijkstra_algo] finalised {u} at cost {dist[u]}, frontier: {len(frontier)}")

        for v, cost in graph.neighbors(u):
            new_dist = dist[u] + cost
            if new_dist < dist[v]:
                if debug:
                    old = "INF" if dist[v] == INF else dist[v]
                    print(f"[dijkstra_algo]   relax {u} -> {v}: {old} -> {new_dist}")
                dist[v] = new_dist
                previous_node[v] = u
                frontier.upsert(v, new_dist)

    return ShortestPaths(source=source, dist=dist, previous_node=previous_node)


def reconstruct_path(
    previous_node: Sequence[Optional[int]], source: int, target: int
) -> List[int]:
    """Walk the predecessor chain back from target to source.

    Args:
        previous_node: Predecessor table from dijkstra_algo.
        source: Source vertex the table was computed for.
        target: Destination vertex.

    Returns:
        List of vertices in order source -> target. [source] when target is
        the source, [] when target is unreachable.

    Raises:
        IndexOutOfRange: target is not a vertex.
        ValueError: the chain loops (never happens for engine output).
    """
    n = len(previous_node)
    if not is_index(target) or not 0 <= target < n:
        raise IndexOutOfRange(f"Target {target!r} out of range [0, {n}).")

    path = [target]
    current = target
    while current != source:
        current = previous_node[current]
        if current is None:
            return []  # chain ended before the source: unreachable
        path.append(current)
        if len(path) > n:
            raise ValueError(
                f"Cycle detected in predecessor chain from {target} at vertex {current}."
            )
    path.reverse()
    return path


def path_cost(graph: DenseGraph, path: Sequence[int]) -> int:
    """Sum of edge costs along path. Raises ValueError on a missing edge."""
    total = 0
    for u, v in zip(path, path[1:]):
        cost = graph.get_edge(u, v)
        if cost == NO_EDGE:
            raise ValueError(f"No edge {u} -> {v} on path {list(path)}.")
        total += cost
    return total


def check_predecessor_cycles(previous_node: Sequence[Optional[int]], source: int):
    """Raise ValueError if any predecessor chain fails to terminate."""
    if previous_node[source] is not None:
        raise ValueError(f"Source {source} has predecessor {previous_node[source]}.")
    done = {source}
    for start in range(len(previous_node)):
        seen = set()
        current = start
        while current is not None and current not in done:
            if current in seen:
                raise ValueError(f"Cycle detected in predecessor chain at vertex {current}.")
            seen.add(current)
            current = previous_node[current]
        done |= seen
