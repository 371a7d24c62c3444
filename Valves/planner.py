"""
High-level entry points: one agent, two agents, or both answers at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .combiner import best_disjoint_pair
from .config import PlannerConfig
from .distances import DistanceMatrix, build_distance_matrix
from .graph import ValveGraph
from .parallel import run_parallel_search
from .problem import ValveProblem
from .search import MaskTable, ValveSearch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SinglePlan:
    value: int
    order: Tuple[str, ...]
    table: MaskTable


@dataclass(frozen=True)
class DualPlan:
    value: int
    first: Tuple[str, ...]
    second: Tuple[str, ...]
    first_mask: int = 0
    second_mask: int = 0


def search_table(problem: ValveProblem, config: PlannerConfig) -> MaskTable:
    """Best value per opened-valve mask for `problem`."""
    if config.workers > 1:
        return run_parallel_search(problem, config.workers, prune_dominated=config.prune_dominated)
    search = ValveSearch(problem, prune_dominated=config.prune_dominated)
    search.initialize()
    search.run()
    return search.table


def _problem(graph: ValveGraph, budget: int, config: PlannerConfig, distances: Optional[DistanceMatrix]) -> ValveProblem:
    graph.require(config.start_valve)
    if distances is None:
        distances = build_distance_matrix(graph)
    return ValveProblem(graph, budget, start=config.start_valve, distances=distances)


def plan_single(
    graph: ValveGraph,
    config: Optional[PlannerConfig] = None,
    *,
    distances: Optional[DistanceMatrix] = None,
) -> SinglePlan:
    config = config or PlannerConfig()
    problem = _problem(graph, config.single_agent_budget, config, distances)
    table = search_table(problem, config)
    mask, value = table.best()
    order = problem.names(table.order(mask)) if mask in table else ()
    logger.info("Single agent, %d minutes: %d via %s", problem.budget, value, " -> ".join(order) or "-")
    return SinglePlan(value=value, order=order, table=table)


def plan_dual(
    graph: ValveGraph,
    config: Optional[PlannerConfig] = None,
    *,
    distances: Optional[DistanceMatrix] = None,
) -> DualPlan:
    config = config or PlannerConfig()
    problem = _problem(graph, config.dual_agent_budget, config, distances)
    table = search_table(problem, config)
    pair = best_disjoint_pair(table, config.combiner, subset_bit_limit=config.subset_bit_limit)
    first = problem.names(table.order(pair.first_mask)) if pair.first_mask in table else ()
    second = problem.names(table.order(pair.second_mask)) if pair.second_mask in table else ()
    logger.info(
        "Two agents, %d minutes each: %d via [%s] and [%s]",
        problem.budget, pair.value, " -> ".join(first) or "-", " -> ".join(second) or "-",
    )
    return DualPlan(
        value=pair.value,
        first=first,
        second=second,
        first_mask=pair.first_mask,
        second_mask=pair.second_mask,
    )


def solve(graph: ValveGraph, config: Optional[PlannerConfig] = None) -> Tuple[int, int]:
    """(single-agent maximum, dual-agent maximum) for `graph`."""
    config = config or PlannerConfig()
    graph.require(config.start_valve)
    distances = build_distance_matrix(graph)
    single = plan_single(graph, config, distances=distances)
    dual = plan_dual(graph, config, distances=distances)
    return single.value, dual.value
