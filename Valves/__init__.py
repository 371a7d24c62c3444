"""Valve opening planner: which valves to open, in what order, for one or two agents."""

from .combiner import MaskPair, best_disjoint_pair
from .config import PlannerConfig
from .distances import DistanceMatrix, build_distance_matrix
from .errors import (
    GraphConfigurationError,
    InfeasiblePlanError,
    MalformedRecordError,
    MissingStartValveError,
    UnresolvedNeighborError,
)
from .graph import Valve, ValveGraph
from .parsing import load_graph, parse_scan
from .planner import DualPlan, SinglePlan, plan_dual, plan_single, solve
from .problem import ValveProblem
from .search import MaskTable, ValveSearch

__all__ = [
    "MaskPair",
    "best_disjoint_pair",
    "PlannerConfig",
    "DistanceMatrix",
    "build_distance_matrix",
    "GraphConfigurationError",
    "InfeasiblePlanError",
    "MalformedRecordError",
    "MissingStartValveError",
    "UnresolvedNeighborError",
    "Valve",
    "ValveGraph",
    "load_graph",
    "parse_scan",
    "DualPlan",
    "SinglePlan",
    "plan_dual",
    "plan_single",
    "solve",
    "ValveProblem",
    "MaskTable",
    "ValveSearch",
]
