import argparse
import sys
from typing import Callable, List, Optional

from dense_dijkstra.dijkstra import dijkstra_algo
from dense_dijkstra.errors import ShortestPathError
from dense_dijkstra.graph import MAX_NODES
from dense_dijkstra.graph_reader import GraphReader
from dense_dijkstra.report import (
    DEFAULT_WIDTH,
    format_cost,
    format_path,
    format_results_table,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dense-dijkstra",
        description="Shortest paths from one source vertex over a dense cost matrix",
    )
    parser.add_argument("graph_file", help="Text file: N followed by the N*N cost matrix (-1 = no edge)")
    parser.add_argument("--source", type=int, default=None, help="Source vertex; prompted for when omitted")
    parser.add_argument("--target", type=int, default=None, help="Also print the route to this vertex")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept a truncated graph file, treating missing costs as missing edges",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=MAX_NODES,
        help=f"Exclusive upper bound on the vertex count (default {MAX_NODES}, 0 for none)",
    )
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Column width of the results table")
    parser.add_argument("--debug", action="store_true", help="Trace the loader and the search")
    return parser


def choose_source(
    vertex_count: int,
    source: Optional[int] = None,
    input_fn: Callable[[str], str] = input,
) -> int:
    """Pick the source vertex, prompting if none was given.

    Anything that is not a vertex of the graph falls back to 0.
    """
    if source is None:
        try:
            answer = input_fn(f"Enter source node number [0 to {vertex_count - 1}]: ")
            source = int(answer.strip())
        except (ValueError, EOFError):
            source = -1
    if source < 0 or source >= vertex_count:
        print("Using 0 as source node.", file=sys.stderr)
        source = 0
    return source


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    max_nodes = args.max_nodes if args.max_nodes > 0 else None

    try:
        reader = GraphReader(
            args.graph_file, max_nodes=max_nodes, lenient=args.lenient, debug=args.debug
        )
    except (OSError, ShortestPathError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Opened: {args.graph_file} for reading.")
    print(f"Number of nodes: {reader.vertex_count}")
    print("Connectivity table read.")

    if args.target is not None and not 0 <= args.target < reader.vertex_count:
        print(
            f"error: target {args.target} out of range [0, {reader.vertex_count})",
            file=sys.stderr,
        )
        return 1

    source = choose_source(reader.vertex_count, args.source, input_fn)
    paths = dijkstra_algo(reader.graph, source, debug=args.debug)
    print(format_results_table(paths, width=args.width), end="")

    if args.target is not None:
        print(f"Route {source} -> {args.target}: {format_path(paths.path_to(args.target))}")
        print(f"Cost: {format_cost(paths.cost_to(args.target))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
