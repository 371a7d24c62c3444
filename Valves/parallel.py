"""
Process-parallel variant of the valve search.

The root state is expanded in the parent; its children (one per first valve
opened) are dealt round-robin to worker processes. Each worker drains its
subtrees into a private `MaskTable` and the parent folds the partial tables
together with an element-wise max, so completion order does not matter.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from .problem import ValveProblem
from .search import Hops, MaskTable, SearchState, drain, expand

logger = logging.getLogger(__name__)


def _search_subtrees(
    hops: Hops,
    values: Sequence[int],
    roots: List[SearchState],
    prune_dominated: bool,
) -> Tuple[Dict[int, Tuple[int, Tuple[int, ...]]], Dict[str, int]]:
    """Drain the given subtrees in a worker process.

    Defined at module level so ProcessPoolExecutor can pickle it. Returns the
    partial table as plain ``mask -> (value, order)`` data plus counters.
    """
    table = MaskTable()
    for root in roots:
        table.record(root.mask, root.cumulative_value, root.order)
    stats = drain(list(roots), hops, values, table, prune_dominated=prune_dominated)
    entries = {mask: (value, table.order(mask)) for mask, value in table.items()}
    return entries, stats


def run_parallel_search(
    problem: ValveProblem,
    workers: int,
    *,
    prune_dominated: bool = True,
    executor: Optional[Executor] = None,
) -> MaskTable:
    """Search `problem` with up to `workers` processes and return the merged table."""
    if workers < 1:
        raise ValueError("workers must be at least 1")

    root = SearchState(problem.start_index, 0, problem.budget, 0)
    table = MaskTable()
    table.record(root.mask, root.cumulative_value, root.order)

    children = list(expand(root, problem.hops, problem.values))
    if not children:
        return table

    if workers == 1:
        for child in children:
            table.record(child.mask, child.cumulative_value, child.order)
        stats = drain(children, problem.hops, problem.values, table, prune_dominated=prune_dominated)
        logger.info("Serial search: %d states expanded, %d pruned", stats["expanded"], stats["pruned"])
        return table

    partitions = [children[i::workers] for i in range(workers)]
    partitions = [part for part in partitions if part]
    logger.info("Splitting %d first moves over %d workers", len(children), len(partitions))

    own_executor = executor is None
    pool = executor if executor is not None else ProcessPoolExecutor(max_workers=len(partitions))
    try:
        futures = [
            pool.submit(_search_subtrees, problem.hops, problem.values, part, prune_dominated)
            for part in partitions
        ]
        for index, future in enumerate(futures):
            entries, stats = future.result()
            logger.debug(
                "Worker %d: %d states expanded, %d pruned, %d masks",
                index, stats["expanded"], stats["pruned"], len(entries),
            )
            partial = MaskTable()
            for mask, (value, order) in entries.items():
                partial.record(mask, value, order)
            table.merge(partial)
    finally:
        if own_executor:
            pool.shutdown()

    return table
