# hillclimb/services/graph_service.py
from typing import Dict, Hashable, Iterable, List, Tuple

DEFAULT_HEURISTIC = 0.0


class GraphModel:
    """
    Directed graph whose vertices carry a heuristic value (lower = more promising).
    - heuristic: {vertex: h}
    - adjacency: {vertex: [neighbor, ...]} in insertion order, duplicates kept
    Lookups never raise: unknown vertices have no neighbors and h = DEFAULT_HEURISTIC.
    """

    def __init__(self):
        self.heuristic: Dict[Hashable, float] = {}
        self.adjacency: Dict[Hashable, List[Hashable]] = {}
        self._seen: Dict[Hashable, None] = {}  # first-seen order of every id

    def add_vertex(self, vertex: Hashable, heuristic: float) -> None:
        # last write wins; an existing neighbor list is kept
        self.heuristic[vertex] = float(heuristic)
        self.adjacency.setdefault(vertex, [])
        self._seen.setdefault(vertex, None)

    def add_edge(self, source: Hashable, target: Hashable) -> None:
        # source may be unregistered: it gets a neighbor list but no heuristic
        self.adjacency.setdefault(source, []).append(target)
        self._seen.setdefault(source, None)
        self._seen.setdefault(target, None)

    def neighbors_of(self, vertex: Hashable) -> List[Hashable]:
        return list(self.adjacency.get(vertex, []))

    def heuristic_of(self, vertex: Hashable) -> float:
        return self.heuristic.get(vertex, DEFAULT_HEURISTIC)

    def vertices(self) -> List[Hashable]:
        return list(self._seen)

    def vertex_count(self) -> int:
        return len(self._seen)

    def edges(self) -> List[Tuple[Hashable, Hashable]]:
        return [(u, v) for u, neighs in self.adjacency.items() for v in neighs]

    def __contains__(self, vertex) -> bool:
        return vertex in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __repr__(self):
        return f"GraphModel(vertices={self.vertex_count()}, edges={len(self.edges())})"


def build_graph(
    vertices: Iterable[Tuple[Hashable, float]],
    edges: Iterable[Tuple[Hashable, Hashable]],
) -> GraphModel:
    graph = GraphModel()
    for vertex, h in vertices:
        graph.add_vertex(vertex, h)
    for u, v in edges:
        graph.add_edge(u, v)
    return graph
