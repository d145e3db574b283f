"""Text import and export for GraphStore.

Supported input formats:
  - Edge list: one ``origin destination [weight]`` per line, whitespace separated.
  - Edge list with header: as above, the first line is ignored.
  - Adjacency list: ``origin<TAB>dest[,weight]<TAB>dest[,weight]...`` per line.

Blank lines are skipped. Vertex ids are integers, weights are numbers and
default to 1 when omitted.
"""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from algraph.graph.store import (
    AdjacencyRecord,
    GraphStore,
    NodeID,
    Weight,
)
from algraph.logging import get_logger

logger = get_logger(__name__)


class InputFormat(IntEnum):
    """Text layouts accepted by ``read_graph``."""

    ADJACENCY_LIST = 1
    EDGE_LIST = 2
    EDGE_LIST_WITH_HEADER = 3

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_label(cls, label: str) -> InputFormat:
        """Resolve a label such as ``"edge-list"`` or ``"adjacency list"``."""
        key = label.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(f.label for f in cls)
            raise ValueError(
                f"Unknown graph format '{label}'. Use one of: {valid}."
            ) from None


class GraphFormatError(ValueError):
    """Raised when a line of graph text cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


def _parse_id(token: str) -> NodeID:
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f"invalid vertex id '{token}'") from None


def _parse_weight(token: str) -> Weight:
    try:
        return float(token)
    except ValueError:
        raise GraphFormatError(f"invalid edge weight '{token}'") from None


def parse_edge_list_line(line: str) -> Tuple[NodeID, NodeID, Optional[Weight]]:
    """Parse ``"origin destination [weight]"`` into an edge record."""
    tokens = line.split()
    if len(tokens) not in (2, 3):
        raise GraphFormatError(
            f"expected 'origin destination [weight]', got '{line.strip()}'"
        )
    weight = _parse_weight(tokens[2]) if len(tokens) == 3 else None
    return _parse_id(tokens[0]), _parse_id(tokens[1]), weight


def parse_adjacency_list_line(line: str) -> AdjacencyRecord:
    """Parse ``"origin<TAB>dest[,weight]..."`` into an adjacency record."""
    tokens = line.split()
    if not tokens:
        raise GraphFormatError("empty adjacency record")
    origin = _parse_id(tokens[0])
    neighbors: List[Tuple[NodeID, Optional[Weight]]] = []
    for token in tokens[1:]:
        parts = token.split(",")
        if len(parts) not in (1, 2) or not all(parts):
            raise GraphFormatError(f"expected 'dest[,weight]', got '{token}'")
        weight = _parse_weight(parts[1]) if len(parts) == 2 else None
        neighbors.append((_parse_id(parts[0]), weight))
    return origin, neighbors


def _numbered(lines: Iterable[str], skip_header: bool) -> Iterator[Tuple[int, str]]:
    for line_number, line in enumerate(lines, start=1):
        if skip_header and line_number == 1:
            continue
        if line.strip():
            yield line_number, line


def edge_records(
    lines: Iterable[str], skip_header: bool = False
) -> Iterator[Tuple[NodeID, NodeID, Optional[Weight]]]:
    """Yield edge records from edge-list lines, tagging errors with line numbers."""
    for line_number, line in _numbered(lines, skip_header):
        try:
            yield parse_edge_list_line(line)
        except GraphFormatError as exc:
            raise GraphFormatError(str(exc), line_number) from None


def adjacency_records(lines: Iterable[str]) -> Iterator[AdjacencyRecord]:
    """Yield adjacency records from adjacency-list lines."""
    for line_number, line in _numbered(lines, skip_header=False):
        try:
            yield parse_adjacency_list_line(line)
        except GraphFormatError as exc:
            raise GraphFormatError(str(exc), line_number) from None


def graph_from_lines(
    lines: Iterable[str],
    fmt: InputFormat = InputFormat.EDGE_LIST,
    directed: bool = True,
    pre_reciprocated: bool = False,
) -> GraphStore:
    """Build a GraphStore from lines of text in the given format."""
    if fmt is InputFormat.ADJACENCY_LIST:
        return GraphStore.from_adjacency(
            adjacency_records(lines), directed, pre_reciprocated
        )
    return GraphStore.from_edges(
        edge_records(lines, skip_header=fmt is InputFormat.EDGE_LIST_WITH_HEADER),
        directed,
        pre_reciprocated,
    )


def read_graph(
    path: Union[str, Path],
    fmt: InputFormat = InputFormat.EDGE_LIST,
    directed: bool = True,
    pre_reciprocated: bool = False,
) -> GraphStore:
    """Read a graph file.

    Args:
        path: File to read.
        fmt: Input layout.
        directed: Whether the graph is directed.
        pre_reciprocated: For undirected input, whether both directions of
            every edge are already listed.

    Returns:
        GraphStore: The constructed store.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        GraphFormatError: If a line cannot be parsed.
    """
    path = Path(path)
    logger.info(f"Importing graph from {path} ({fmt.label})")
    with path.open("r", encoding="utf-8") as fh:
        store = graph_from_lines(fh, fmt, directed, pre_reciprocated)
    logger.info(
        f"Graph imported: {len(store)} vertices, {store.edge_count()} edges"
    )
    return store


def format_weight(weight: Weight) -> str:
    """Render a weight without a trailing ``.0``; non-integers keep full precision."""
    if float(weight).is_integer():
        return str(int(weight))
    return repr(float(weight))


def graph_to_adjacency_lines(store: GraphStore) -> List[str]:
    """Render the store as adjacency-list lines (readable back by ``read_graph``)."""
    lines = []
    for vertex_id, neighbors in store.adjacency():
        tokens = [str(vertex_id)]
        tokens.extend(f"{dst},{format_weight(w)}" for dst, w in neighbors)
        lines.append("\t".join(tokens))
    return lines


def graph_to_edgelist(store: GraphStore, separator: str = " ") -> List[str]:
    """Render every stored arc as ``src<sep>dst<sep>weight``."""
    return [
        separator.join((str(src), str(dst), format_weight(w)))
        for src, dst, w in store.edges()
    ]
