import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from Core.problem import Solution
from Valves.errors import InfeasiblePlanError, MissingStartValveError
from Valves.graph import ValveGraph
from Valves.problem import ValveProblem

BEST_ORDER = ("DD", "BB", "JJ", "HH", "EE", "CC")


def test_schedule_of_known_best_order(example_graph):
    problem = ValveProblem(example_graph, 30)
    timeline = problem.schedule(BEST_ORDER)
    assert [a.minute for a in timeline] == [2, 5, 9, 17, 21, 24]
    assert [a.gained for a in timeline] == [560, 325, 441, 286, 27, 12]


def test_evaluate_scores_activation_order(example_graph):
    problem = ValveProblem(example_graph, 30)
    solution = Solution(BEST_ORDER, problem)
    assert solution.evaluate() == 1651
    assert problem.get_initial_solution().evaluate() == 0


@pytest.mark.parametrize(
    "order",
    [
        ("DD", "DD"),
        ("FF",),
        ("ZZ",),
        BEST_ORDER + ("AA",),
    ],
)
def test_infeasible_orders(example_graph, order):
    problem = ValveProblem(example_graph, 30)
    with pytest.raises(InfeasiblePlanError):
        problem.schedule(order)


def test_order_overrunning_budget(example_graph):
    problem = ValveProblem(example_graph, 5)
    with pytest.raises(InfeasiblePlanError):
        problem.schedule(("HH",))


def test_problem_info_and_bounds(example_graph):
    problem = ValveProblem(example_graph, 30)
    info = problem.get_problem_info()
    assert info["dimension"] == 10
    assert info["start"] == "AA"
    assert info["useful_valves"] == ["BB", "CC", "DD", "EE", "HH", "JJ"]
    assert problem.get_bounds()["upper_bound"] >= 1651


def test_missing_start_valve(example_graph):
    with pytest.raises(MissingStartValveError):
        ValveProblem(example_graph, 30, start="ZZ")


def test_negative_budget(example_graph):
    with pytest.raises(ValueError):
        ValveProblem(example_graph, -1)


def test_useful_start_valve_is_never_opened(caplog):
    graph = ValveGraph.from_records([("AA", 10, ["BB"]), ("BB", 3, ["AA"])])
    with caplog.at_level(logging.WARNING, logger="Valves.problem"):
        problem = ValveProblem(graph, 10)
    assert "Start valve AA" in caplog.text
    assert problem.values[problem.start_index] == 0
    with pytest.raises(InfeasiblePlanError):
        problem.schedule(("AA",))


def test_solution_comparison(example_graph):
    problem = ValveProblem(example_graph, 30)
    best = Solution(BEST_ORDER, problem)
    best.evaluate()
    short = Solution(("DD",), problem)
    short.evaluate()
    assert short < best
    assert best > short
    clone = best.copy()
    assert clone == best and clone.id == best.id
    assert best.copy(preserve_id=False).id != best.id


@pytest.mark.parametrize("budget", [2.5, 30.0, True])
def test_fractional_budget_is_rejected(example_graph, budget):
    with pytest.raises(ValueError, match="whole number"):
        ValveProblem(example_graph, budget)
