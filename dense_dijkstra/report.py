from typing import List, Sequence

from dense_dijkstra.dijkstra import INF, ShortestPaths

DEFAULT_WIDTH = 8
# appended to rows whose vertex has no predecessor (the source, unreachable ones)
NO_PREDECESSOR_MARK = " >>-->"


def format_cost(cost: int) -> str:
    """Cost as text; INF -> 'N/A'."""
    if cost is None or cost == INF:
        return "N/A"
    return str(cost)


def format_path(path: Sequence[int]) -> str:
    if not path:
        return "no path"
    return " -> ".join(str(v) for v in path)


def format_results_table(paths: ShortestPaths, width: int = DEFAULT_WIDTH) -> str:
    """Render the distance and predecessor tables, one row per vertex.

    Columns are From, To, cumulative Cost and Prev(ious) node, each right
    aligned in `width` characters (8 here):

                            Cum.    Prev
           From:     To:   Cost:   Node:
               0       0       0      -1 >>-->
               0       1       1       0
               0       2     N/A      -1 >>-->
    """
    lines: List[str] = [
        f"{'Cum.':>{3 * width}}{'Prev':>{width}}",
        f"{'From:':>{width}}{'To:':>{width}}{'Cost:':>{width}}{'Node:':>{width}}",
    ]
    for i, (cost, prev) in enumerate(zip(paths.dist, paths.previous_node)):
        row = (
            f"{paths.source:>{width}}{i:>{width}}"
            f"{format_cost(cost):>{width}}{(-1 if prev is None else prev):>{width}}"
        )
        if prev is None:
            row += NO_PREDECESSOR_MARK
        lines.append(row)
    return "\n".join(lines) + "\n"
