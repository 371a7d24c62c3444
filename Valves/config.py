from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

CombinerStrategy = Literal["auto", "pairwise", "subset"]
COMBINER_STRATEGIES = ("auto", "pairwise", "subset")


@dataclass(frozen=True)
class PlannerConfig:
    """Configuration surface for the valve planner.

    The two budgets are independent: the dual-agent budget is not derived
    from the single-agent one.
    """

    start_valve: str = "AA"
    single_agent_budget: int = 30
    dual_agent_budget: int = 26

    # Search controls
    prune_dominated: bool = True
    workers: int = 1

    # Dual-agent combination
    combiner: CombinerStrategy = "auto"
    subset_bit_limit: int = 20  # larger tables fall back to the pairwise scan under "auto"

    def __post_init__(self) -> None:
        if not self.start_valve:
            raise ValueError("start_valve cannot be empty")
        for budget in (self.single_agent_budget, self.dual_agent_budget):
            if isinstance(budget, bool) or not isinstance(budget, numbers.Integral):
                raise ValueError(f"time budgets must be whole minutes, got {budget!r}")
        if self.single_agent_budget < 0 or self.dual_agent_budget < 0:
            raise ValueError("time budgets must be non-negative")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.combiner not in COMBINER_STRATEGIES:
            raise ValueError(f"Unsupported combiner: {self.combiner!r}")
        if self.subset_bit_limit < 0:
            raise ValueError("subset_bit_limit must be non-negative")

    def to_json_dict(self) -> Dict[str, Any]:
        return asdict(self)
