import random

import pytest

from hillclimb.algorithms.hill_climbing import HillClimbSearch, Outcome, TraceStep, hill_climbing
from hillclimb.services.graph_service import build_graph


@pytest.fixture
def example_graph():
    return build_graph(
        [("A", 0), ("B", 5), ("C", 2), ("D", 0)],
        [("A", "B"), ("A", "C"), ("C", "D")],
    )


def test_reaches_goal(example_graph):
    result = hill_climbing(example_graph, "A", "D")

    assert result.goal_reached
    assert result.outcome is Outcome.GOAL_REACHED
    assert result.path == ["A", "C", "D"]
    assert result.path_string == "A-> C-> D"
    assert result.expanded == 2
    assert result.trace == (
        TraceStep("A", ("B", "C"), ("C", "B"), ("C", "B")),
        TraceStep("C", ("D",), ("D",), ("D", "B")),
        TraceStep("D", is_goal=True),
    )


def test_stuck_on_cycle():
    graph = build_graph([("A", 0), ("B", 1)], [("A", "B"), ("B", "A")])
    result = hill_climbing(graph, "A", "Z")

    assert not result.goal_reached
    assert result.outcome is Outcome.STUCK
    assert result.path == ["A", "B"]
    last = result.trace[-1]
    assert last.expanded_node == "B"
    assert last.raw_adjacency == () and last.sorted_adjacency == ()
    assert not last.is_goal


def test_start_is_goal(example_graph):
    result = hill_climbing(example_graph, "C", "C")
    assert result.goal_reached
    assert len(result.trace) == 1
    assert result.trace[0].is_goal
    assert result.trace[0].raw_adjacency == ()
    assert result.expanded == 0


def test_unknown_start_is_stuck_immediately(example_graph):
    result = hill_climbing(example_graph, "Q", "D")
    assert not result.goal_reached
    assert result.trace == (TraceStep("Q"),)


def test_ties_keep_adjacency_order():
    graph = build_graph(
        [("A", 0), ("B", 1), ("C", 1), ("D", 0)],
        [("A", "C"), ("A", "B"), ("A", "D")],
    )
    step = hill_climbing(graph, "A", "Z").trace[0]
    assert step.raw_adjacency == ("C", "B", "D")
    assert step.sorted_adjacency == ("D", "C", "B")


def test_missing_heuristic_counts_as_zero():
    graph = build_graph([("A", 0), ("B", 3)], [("A", "B"), ("A", "X")])
    result = hill_climbing(graph, "A", "B")
    assert result.trace[0].sorted_adjacency == ("X", "B")
    # greedy goes to X, which is a dead end
    assert result.path == ["A", "X"]
    assert not result.goal_reached


def test_never_backtracks_to_better_branch():
    graph = build_graph(
        [("A", 0), ("B", 2), ("C", 1), ("D", 3)],
        [("A", "B"), ("A", "C"), ("C", "B"), ("C", "D")],
    )
    result = hill_climbing(graph, "A", "D")

    assert result.path == ["A", "C", "B"]
    assert not result.goal_reached
    assert [s.residual_frontier for s in result.trace] == [
        ("C", "B"),
        ("D", "B"),
        ("D",),
    ]


def test_residual_frontier_uses_exact_ids():
    graph = build_graph(
        [("A", 0), ("X", 1), ("XY", 2), ("G", 0)],
        [("A", "X"), ("A", "XY"), ("X", "G")],
    )
    result = hill_climbing(graph, "A", "G")
    assert result.goal_reached
    assert result.trace[1].expanded_node == "X"
    assert result.trace[1].residual_frontier == ("G", "XY")


def test_duplicate_edges_listed_once_in_frontier():
    graph = build_graph([("A", 0), ("B", 1)], [("A", "B"), ("A", "B")])
    step = hill_climbing(graph, "A", "Z").trace[0]
    assert step.raw_adjacency == ("B", "B")
    assert step.residual_frontier == ("B",)


def test_self_loop_is_not_a_candidate():
    graph = build_graph([("A", 0)], [("A", "A")])
    result = hill_climbing(graph, "A", "Z")
    assert result.trace == (TraceStep("A"),)
    assert not result.goal_reached


def test_search_instance_is_reusable(example_graph):
    search = HillClimbSearch(example_graph)
    first = search.run("A", "D")
    second = search.run("A", "D")
    assert first.trace == second.trace


def test_iteration_cap(monkeypatch):
    graph = build_graph([("A", 0), ("B", 0), ("C", 0)], [("A", "B"), ("B", "C")])
    monkeypatch.setattr(graph, "vertex_count", lambda: 0)
    result = hill_climbing(graph, "A", "C")
    assert not result.goal_reached
    assert result.path == ["A"]


def _random_graph(seed):
    rnd = random.Random(seed)
    ids = [f"v{i}" for i in range(rnd.randint(1, 12))]
    vertices = [(v, rnd.randint(0, 5)) for v in ids]
    edges = [(rnd.choice(ids), rnd.choice(ids)) for _ in range(rnd.randint(0, 30))]
    return build_graph(vertices, edges), ids, rnd


@pytest.mark.parametrize("seed", range(50))
def test_trace_invariants_on_random_graphs(seed):
    graph, ids, rnd = _random_graph(seed)
    start, goal = rnd.choice(ids), rnd.choice(ids + ["missing"])
    result = hill_climbing(graph, start, goal)

    expanded = [s.expanded_node for s in result.trace if not s.is_goal]
    assert len(result.trace) <= graph.vertex_count()
    assert len(set(expanded)) == len(expanded)

    for i, step in enumerate(result.trace):
        assert list(step.sorted_adjacency) == sorted(step.raw_adjacency, key=graph.heuristic_of)
        if step.is_goal:
            continue
        assert not set(step.raw_adjacency) & set(expanded[: i + 1])
        if i + 1 < len(result.trace):
            assert result.trace[i + 1].expanded_node == step.sorted_adjacency[0]
        else:
            assert step.sorted_adjacency == ()

    assert result.goal_reached == (result.trace[-1].is_goal)
    if result.goal_reached:
        assert result.path[-1] == goal
