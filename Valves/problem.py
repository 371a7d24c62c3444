from __future__ import annotations

import logging
import numbers
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from Core.problem import ProblemInterface, Solution

from .distances import DistanceMatrix, build_distance_matrix
from .errors import InfeasiblePlanError
from .graph import ValveGraph

logger = logging.getLogger(__name__)


class Activation(NamedTuple):
    minute: int      # elapsed time when the valve starts releasing
    valve: str
    gained: int      # rate * remaining time after opening


class ValveProblem(ProblemInterface):
    """
    Valve opening posed for the repository's search algorithms.

    A solution is an activation order: a tuple of valve names opened one
    after the other, starting from `start` with `budget` minutes. Walking one
    tunnel costs a minute and opening a valve costs a minute; an opened valve
    releases its flow rate every remaining minute. Fitness is the total
    released value (higher is better).
    """

    def __init__(
        self,
        graph: ValveGraph,
        budget: int,
        *,
        start: str = "AA",
        distances: Optional[DistanceMatrix] = None,
    ) -> None:
        if isinstance(budget, bool) or not isinstance(budget, numbers.Integral):
            raise ValueError(f"budget must be a whole number of minutes, got {budget!r}")
        budget = int(budget)
        if budget < 0:
            raise ValueError("budget must be non-negative")
        graph.require(start)

        self.graph = graph
        self.budget = budget
        self.start = start
        self.distances = distances if distances is not None else build_distance_matrix(graph)
        self.start_index = self.distances.index(start)
        self.hops = self.distances.hop_rows()

        values = [graph[name].flow_rate for name in self.distances.index_to_name]
        if values[self.start_index] > 0:
            # Search starts standing on the start valve and never opens it.
            logger.warning(
                "Start valve %s has flow rate %d; it is treated as already accounted for",
                start, values[self.start_index],
            )
            values[self.start_index] = 0
        self.values = values

    # ---- ProblemInterface API ----
    def evaluate(self, solution: Solution) -> float:
        fitness = float(sum(a.gained for a in self.schedule(solution.representation)))
        solution.fitness = fitness
        return fitness

    def get_initial_solution(self) -> Solution:
        return Solution((), self)

    def get_problem_info(self) -> Dict[str, Any]:
        return {
            "dimension": len(self.distances),
            "problem_type": "discrete",
            "budget": self.budget,
            "start": self.start,
            "useful_valves": [self.distances.index_to_name[i] for i, v in enumerate(self.values) if v > 0],
        }

    def get_bounds(self) -> Dict[str, float]:
        # Opening every useful valve right away is an upper bound no plan can beat.
        upper = sum(v * max(0, self.budget - 1) for v in self.values)
        return {"lower_bound": 0.0, "upper_bound": float(upper)}

    # ---- Domain helpers ----
    def schedule(self, order: Iterable[str]) -> List[Activation]:
        """Replay an activation order, raising `InfeasiblePlanError` if it cannot run."""
        current = self.start_index
        remaining = self.budget
        opened = set()
        timeline: List[Activation] = []
        for name in order:
            if name not in self.distances.name_to_index:
                raise InfeasiblePlanError(f"Unknown valve {name!r} in plan")
            target = self.distances.index(name)
            if name in opened:
                raise InfeasiblePlanError(f"Valve {name} is opened twice")
            if self.values[target] <= 0:
                raise InfeasiblePlanError(f"Valve {name} releases nothing when opened")
            hops = self.hops[current][target]
            if hops is None:
                raise InfeasiblePlanError(f"Valve {name} cannot be reached")
            remaining -= hops + 1
            if remaining <= 0:
                raise InfeasiblePlanError(f"Valve {name} is opened after the budget runs out")
            opened.add(name)
            timeline.append(Activation(self.budget - remaining, name, self.values[target] * remaining))
            current = target
        return timeline

    def names(self, order: Sequence[int]) -> tuple:
        """Translate dense indices to valve names."""
        return tuple(self.distances.index_to_name[i] for i in order)

    def mask_names(self, mask: int) -> List[str]:
        return [name for i, name in enumerate(self.distances.index_to_name) if mask >> i & 1]
