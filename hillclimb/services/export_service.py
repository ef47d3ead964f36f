# hillclimb/services/export_service.py
from typing import Hashable, Iterable, List

import hillclimb.config as config
from hillclimb.algorithms.hill_climbing import SearchResult, TraceStep
from hillclimb.services.graph_service import GraphModel

HEADER = "Expanded Node\tAdjacency List\tList L1\t\tList L"
STOP = "Stop"


def _format_heuristic(h: float) -> str:
    return str(int(h)) if float(h).is_integer() else str(h)


def vertex_label(graph: GraphModel, vertex: Hashable) -> str:
    """Vertex id followed by its heuristic, e.g. 'C2'."""
    return f"{vertex}{_format_heuristic(graph.heuristic_of(vertex))}"


def _labels(graph: GraphModel, vertices: Iterable[Hashable]) -> str:
    return ",".join(vertex_label(graph, v) for v in vertices)


def format_row(step: TraceStep, graph: GraphModel) -> List[str]:
    """The four table cells of one trace step, unpadded."""
    if step.is_goal:
        return [vertex_label(graph, step.expanded_node), STOP, "", ""]
    return [
        vertex_label(graph, step.expanded_node),
        _labels(graph, step.raw_adjacency),
        _labels(graph, step.sorted_adjacency),
        _labels(graph, step.residual_frontier),
    ]


def trace_to_text(result: SearchResult, graph: GraphModel, column_width: int = None) -> str:
    width = config.EXPORT_COLUMN_WIDTH if column_width is None else column_width
    lines = [HEADER]
    for step in result.trace:
        lines.append("\t".join(cell.ljust(width) for cell in format_row(step, graph)))
    return "\n".join(lines)
