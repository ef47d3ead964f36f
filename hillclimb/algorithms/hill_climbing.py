# hillclimb/algorithms/hill_climbing.py
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Set, Tuple
import logging, time

from hillclimb.services.graph_service import GraphModel

logger = logging.getLogger(__name__)


class Outcome(str, Enum):
    GOAL_REACHED = "goal_reached"
    STUCK = "stuck"


@dataclass(frozen=True)
class TraceStep:
    expanded_node: Hashable
    raw_adjacency: Tuple[Hashable, ...] = ()
    sorted_adjacency: Tuple[Hashable, ...] = ()
    residual_frontier: Tuple[Hashable, ...] = ()
    is_goal: bool = False


@dataclass(frozen=True)
class SearchResult:
    start: Hashable
    goal: Hashable
    trace: Tuple[TraceStep, ...]
    goal_reached: bool
    runtime_ms: float = 0.0

    @property
    def path(self) -> List[Hashable]:
        return [step.expanded_node for step in self.trace]

    @property
    def path_string(self) -> str:
        return "-> ".join(str(v) for v in self.path)

    @property
    def expanded(self) -> int:
        return sum(1 for step in self.trace if not step.is_goal)

    @property
    def outcome(self) -> Outcome:
        return Outcome.GOAL_REACHED if self.goal_reached else Outcome.STUCK


class HillClimbSearch:
    """
    Hill Climbing over a GraphModel: from the current vertex always move to the
    unvisited out-neighbor with the lowest heuristic, never backtrack.
    Stops when the goal is reached or when the current vertex has no unvisited
    neighbor (stuck).

    Each step of the trace records the expanded vertex, its unvisited neighbors
    (insertion order), the same neighbors sorted by heuristic (stable) and the
    residual frontier: neighbors announced so far that are still unexpanded.
    The frontier is bookkeeping for the trace only; it never picks the successor.
    """

    def __init__(self, graph: GraphModel):
        self.graph = graph

    def _sorted_by_heuristic(self, vertices: List[Hashable]) -> List[Hashable]:
        # sorted() is stable: equal heuristics keep adjacency order
        return sorted(vertices, key=self.graph.heuristic_of)

    def run(self, start: Hashable, goal: Hashable) -> SearchResult:
        t0 = time.perf_counter()

        current = start
        visited: Set[Hashable] = set()
        trace: List[TraceStep] = []
        frontier: List[Hashable] = []  # announced neighbors, first-seen order
        announced: Set[Hashable] = set()

        # every expansion visits a new vertex; +1 for a start the graph never saw
        max_steps = self.graph.vertex_count() + 1
        stuck = False

        while current != goal:
            if len(trace) >= max_steps:
                logger.warning("hill climbing hit the %d-step cap at %r", max_steps, current)
                stuck = True
                break

            visited.add(current)
            candidates = [v for v in self.graph.neighbors_of(current) if v not in visited]
            ordered = self._sorted_by_heuristic(candidates)

            new = []
            for v in ordered:
                if v not in announced and v not in new:
                    new.append(v)
            residual = new + [v for v in frontier if v not in visited]

            trace.append(TraceStep(
                expanded_node=current,
                raw_adjacency=tuple(candidates),
                sorted_adjacency=tuple(ordered),
                residual_frontier=tuple(residual),
            ))
            logger.debug("expand %r: candidates=%r sorted=%r", current, candidates, ordered)

            frontier.extend(new)
            announced.update(new)

            if not ordered:
                stuck = True
                break
            current = ordered[0]

        if not stuck:
            trace.append(TraceStep(expanded_node=goal, is_goal=True))

        dt = (time.perf_counter() - t0) * 1000.0
        result = SearchResult(
            start=start,
            goal=goal,
            trace=tuple(trace),
            goal_reached=not stuck,
            runtime_ms=round(dt, 3),
        )
        logger.info(
            "hill climbing %r -> %r: %s after %d expansions",
            start, goal, result.outcome.value, result.expanded,
        )
        return result


def hill_climbing(graph: GraphModel, start: Hashable, goal: Hashable) -> SearchResult:
    return HillClimbSearch(graph).run(start, goal)
