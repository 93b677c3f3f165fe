class ShortestPathError(Exception):
    """Base class for every error raised by dense_dijkstra."""


class InvalidSize(ShortestPathError, ValueError):
    """Vertex count is non-positive or not below the configured maximum."""


class IndexOutOfRange(ShortestPathError, IndexError):
    """A vertex or flattened slot index lies outside the graph."""


class InvalidSource(ShortestPathError, ValueError):
    """Source vertex passed to the engine is not a vertex of the graph."""


class GraphFormatError(ShortestPathError, ValueError):
    """The graph description contains something other than integers."""


class IncompleteInput(ShortestPathError, ValueError):
    """The graph description ended before all N*N costs were read."""

    def __init__(self, expected: int, read: int):
        self.expected = expected
        self.read = read
        super().__init__(
            f"The graph file is not well formed: expected {expected} costs, "
            f"but the input ended after {read}."
        )


class InvalidCost(ShortestPathError, ValueError):
    """An edge cost is not an integer or is too large for path sums to stay finite."""
