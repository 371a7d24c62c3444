"""
Exhaustive depth-first search over valve activation orders.

Every state the search produces is folded into a `MaskTable`, keyed by the
bitmask of opened valves. Recording prefixes (not only dead ends) is what lets
two agents be combined afterwards: stopping early is a valid plan for one of
them.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from Core.problem import Solution
from Core.search_algorithm import SearchAlgorithm

from .problem import ValveProblem

logger = logging.getLogger(__name__)

Order = Tuple[int, ...]
Hops = Sequence[Sequence[Optional[int]]]
SeenStates = Dict[Tuple[int, int, int], int]


class SearchState(NamedTuple):
    current: int
    mask: int
    remaining_time: int
    cumulative_value: int
    order: Order = ()


class MaskTable:
    """Best cumulative value (and an order achieving it) per opened-valve mask.

    On equal values the lexicographically smallest order recorded wins, so
    merging tables gives the same content in any order.
    """

    def __init__(self) -> None:
        self._values: Dict[int, int] = {}
        self._orders: Dict[int, Order] = {}

    def record(self, mask: int, value: int, order: Order = ()) -> bool:
        """Keep `value` for `mask` if it improves on the stored one."""
        best = self._values.get(mask)
        if best is None or value > best or (value == best and order < self._orders[mask]):
            self._values[mask] = value
            self._orders[mask] = order
            return True
        return False

    def merge(self, other: "MaskTable") -> "MaskTable":
        """Element-wise max with `other`, in place."""
        for mask, value in other._values.items():
            self.record(mask, value, other._orders[mask])
        return self

    def best(self) -> Tuple[int, int]:
        """(mask, value) of the best entry; (0, 0) when empty."""
        if not self._values:
            return 0, 0
        mask = max(self._values, key=lambda m: (self._values[m], -m))
        return mask, self._values[mask]

    def best_value(self) -> int:
        return self.best()[1]

    def order(self, mask: int) -> Order:
        return self._orders[mask]

    def get(self, mask: int, default: Optional[int] = None) -> Optional[int]:
        return self._values.get(mask, default)

    def items(self):
        return self._values.items()

    def as_dict(self) -> Dict[int, int]:
        return dict(self._values)

    def __getitem__(self, mask: int) -> int:
        return self._values[mask]

    def __contains__(self, mask: object) -> bool:
        return mask in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MaskTable):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"MaskTable({len(self)} masks, best={self.best_value()})"


def expand(state: SearchState, hops: Hops, values: Sequence[int]) -> Iterator[SearchState]:
    """Yield the states reached by opening one more valve from `state`."""
    row = hops[state.current]
    for j, rate in enumerate(values):
        if rate <= 0 or state.mask >> j & 1:
            continue
        distance = row[j]
        if distance is None:
            continue
        remaining = state.remaining_time - distance - 1
        if remaining <= 0:
            continue
        yield SearchState(
            current=j,
            mask=state.mask | (1 << j),
            remaining_time=remaining,
            cumulative_value=state.cumulative_value + rate * remaining,
            order=state.order + (j,),
        )


def advance(
    stack: List[SearchState],
    hops: Hops,
    values: Sequence[int],
    table: MaskTable,
    seen: Optional[SeenStates] = None,
) -> int:
    """Pop one state, record its children in `table` and push them.

    With `seen`, a child whose (position, mask, remaining time) was already
    reached with at least the same value is dropped: its whole subtree is
    dominated. Returns how many children were dropped.
    """
    state = stack.pop()
    pruned = 0
    for child in expand(state, hops, values):
        if seen is not None:
            key = (child.current, child.mask, child.remaining_time)
            if seen.get(key, -1) >= child.cumulative_value:
                pruned += 1
                continue
            seen[key] = child.cumulative_value
        table.record(child.mask, child.cumulative_value, child.order)
        stack.append(child)
    return pruned


def drain(
    stack: List[SearchState],
    hops: Hops,
    values: Sequence[int],
    table: MaskTable,
    *,
    prune_dominated: bool = True,
) -> Dict[str, int]:
    """Run `advance` until `stack` is empty. Returns counters for logging.

    States already on the stack must have been recorded in `table`.
    """
    seen: Optional[SeenStates] = {} if prune_dominated else None
    expanded = pruned = 0
    while stack:
        pruned += advance(stack, hops, values, table, seen)
        expanded += 1
    return {"expanded": expanded, "pruned": pruned}


class ValveSearch(SearchAlgorithm):
    """
    Depth-first search over every profitable activation order of a `ValveProblem`.

    `step()` pops one state from an explicit stack and pushes its children.
    When the stack is empty, `table` holds the best value for every mask of
    opened valves and `best_value` is the single-agent maximum.
    """

    def __init__(self, problem: ValveProblem, *, prune_dominated: bool = True, **kwargs):
        super().__init__(problem, **kwargs)
        self.prune_dominated = prune_dominated
        self.table = MaskTable()
        self._stack: List[SearchState] = []
        self._seen: Optional[SeenStates] = None
        self.expanded = 0
        self.pruned = 0

    def initialize(self):
        super().initialize()
        problem: ValveProblem = self.problem
        root = SearchState(problem.start_index, 0, problem.budget, 0)
        self.table = MaskTable()
        self.table.record(root.mask, root.cumulative_value, root.order)
        self._stack = [root]
        self._seen = {} if self.prune_dominated else None
        self.expanded = 0
        self.pruned = 0

    def step(self) -> bool:
        if not self._stack:
            return False
        problem: ValveProblem = self.problem
        self.pruned += advance(self._stack, problem.hops, problem.values, self.table, self._seen)
        self.expanded += 1
        return bool(self._stack)

    def run(self, max_steps: Optional[int] = None) -> Optional[Solution]:
        if self.best_solution is None:
            self.initialize()
        best = super().run(max_steps)
        if not self._stack:
            logger.info(
                "Search exhausted: %d states expanded, %d pruned, %d masks, best=%d",
                self.expanded, self.pruned, len(self.table), self.best_value,
            )
        return best

    @property
    def best_value(self) -> int:
        return self.table.best_value()

    def get_best_solution(self) -> Optional[Solution]:
        if not len(self.table):
            return self.best_solution
        mask, value = self.table.best()
        problem: ValveProblem = self.problem
        solution = Solution(problem.names(self.table.order(mask)), problem)
        solution.fitness = float(value)
        return solution
