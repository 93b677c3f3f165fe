import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

from dense_dijkstra.errors import GraphFormatError, IncompleteInput, InvalidCost, InvalidSize
from dense_dijkstra.graph import MAX_NODES, DenseGraph


class GraphReader:
    """Reads a graph description file into a DenseGraph.

    File format: whitespace separated integers. The first is the vertex
    count N, followed by the N*N costs of the matrix in row-major order,
    -1 meaning no edge. Anything after the N*N costs is ignored.
    """

    def __init__(
        self,
        graph_file: Union[str, Path],
        max_nodes: Optional[int] = MAX_NODES,
        lenient: bool = False,
        debug: bool = False,
    ):
        self.graph_file = Path(graph_file)
        self.max_nodes = max_nodes
        # lenient: keep going with NO_EDGE for costs missing from a truncated file
        self.lenient = lenient
        self.debug = debug

        try:
            with open(self.graph_file, encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise GraphFormatError(
                f"{self.graph_file}: not a text file (undecodable byte at offset {e.start})."
            ) from e
        if debug:
            print(f"[GraphReader] read {len(text)} characters from {self.graph_file}")

        self.graph, self.values_read = _build_graph(
            text, str(self.graph_file), max_nodes, lenient, debug
        )

    @property
    def vertex_count(self) -> int:
        return self.graph.vertex_count

    @property
    def complete(self) -> bool:
        """False when a truncated file was accepted in lenient mode."""
        return self.values_read == self.vertex_count * self.vertex_count


def parse_graph(
    text: str,
    max_nodes: Optional[int] = MAX_NODES,
    lenient: bool = False,
    debug: bool = False,
) -> DenseGraph:
    """Same as GraphReader, for a description already held in memory."""
    graph, _ = _build_graph(text, "<string>", max_nodes, lenient, debug)
    return graph


def _parse_int(token: str, position: int, origin: str) -> int:
    try:
        return int(token)
    except ValueError as e:
        raise GraphFormatError(
            f"{origin}: value #{position} ({token!r}) is not an integer."
        ) from e


def _build_graph(
    text: str,
    origin: str,
    max_nodes: Optional[int],
    lenient: bool,
    debug: bool,
) -> Tuple[DenseGraph, int]:
    """Returns the graph and the number of costs actually read."""
    tokens = text.split()
    if not tokens:
        raise GraphFormatError(f"{origin}: no vertex count found.")

    n = _parse_int(tokens[0], 0, origin)
    if n <= 0 or (max_nodes is not None and n >= max_nodes):
        limit = "" if max_nodes is None else f" and below {max_nodes}"
        raise InvalidSize(f"{origin}: vertex count {n} must be positive{limit}.")
    graph = DenseGraph(n, max_nodes=max_nodes)

    expected = n * n
    costs = tokens[1 : expected + 1]
    for i, token in enumerate(costs):
        try:
            graph.set_linear(i, _parse_int(token, i + 1, origin))
        except (InvalidCost, OverflowError) as e:
            raise GraphFormatError(
                f"{origin}: value #{i + 1} ({token!r}) is not a usable cost: {e}"
            ) from e

    if len(costs) < expected:
        if not lenient:
            raise IncompleteInput(expected, len(costs))
        print(
            f"[GraphReader] {origin}: expected {expected} costs but read {len(costs)}; "
            f"the remaining {expected - len(costs)} are treated as missing edges.",
            file=sys.stderr,
        )
    elif debug and len(tokens) > expected + 1:
        print(f"[GraphReader] ignoring {len(tokens) - expected - 1} trailing values")
    return graph, len(costs)


def format_graph(graph: DenseGraph) -> str:
    """Serialise graph in the reader's format, one matrix row per line."""
    lines: List[str] = [str(graph.vertex_count)]
    for row in graph.to_matrix():
        lines.append(" ".join(str(int(c)) for c in row))
    return "\n".join(lines) + "\n"


def write_graph(graph: DenseGraph, path: Union[str, Path]):
    Path(path).write_text(format_graph(graph))
