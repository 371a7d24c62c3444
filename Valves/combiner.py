"""
Combination of two agents' plans from a single `MaskTable`.

Both agents start from the same place with the same budget, so one search
serves both; the best joint plan is the pair of disjoint masks with the
largest summed value. The empty mask (an agent that stays put) is always a
valid partner, so the result is never below the best single entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .config import COMBINER_STRATEGIES
from .search import MaskTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaskPair:
    value: int
    first_mask: int
    second_mask: int

    def __post_init__(self) -> None:
        if self.first_mask & self.second_mask:
            raise ValueError("paired masks must be disjoint")


def _sorted_entries(table: MaskTable) -> List[Tuple[int, int]]:
    return sorted(table.items(), key=lambda kv: (-kv[1], kv[0]))


def combine_pairwise(table: MaskTable) -> MaskPair:
    """Quadratic scan over value-sorted entries with early exit."""
    entries = _sorted_entries(table)
    if not entries:
        return MaskPair(0, 0, 0)

    top_mask, top_value = entries[0]
    best = MaskPair(top_value, top_mask, 0)
    for i, (mask_a, value_a) in enumerate(entries):
        if value_a + top_value <= best.value:
            break
        for mask_b, value_b in entries[i + 1:]:
            if value_a + value_b <= best.value:
                break
            if mask_a & mask_b == 0:
                best = MaskPair(value_a + value_b, mask_a, mask_b)
                break
    return best


def used_bits(table: MaskTable) -> List[int]:
    used = 0
    for mask, _ in table.items():
        used |= mask
    return [b for b in range(used.bit_length()) if used >> b & 1]


def combine_subset(table: MaskTable) -> MaskPair:
    """Best-over-subsets transform, then one lookup per mask.

    Masks are first compressed onto the bits the table actually uses, so the
    transform array has ``2 ** len(used_bits(table))`` cells.
    """
    entries = _sorted_entries(table)
    if not entries:
        return MaskPair(0, 0, 0)

    bits = used_bits(table)
    k = len(bits)
    size = 1 << k

    def compress(mask: int) -> int:
        return sum(1 << i for i, b in enumerate(bits) if mask >> b & 1)

    def decompress(compact: int) -> int:
        return sum(1 << b for i, b in enumerate(bits) if compact >> i & 1)

    # best[c] is the best value among recorded subsets of c; arg[c] is that subset.
    # Unset cells default to the empty mask with value 0.
    best = np.zeros(size, dtype=np.int64)
    arg = np.zeros(size, dtype=np.int64)
    compact_entries = []
    for mask, value in entries:
        c = compress(mask)
        compact_entries.append((c, mask, value))
        if value > best[c]:
            best[c] = value
            arg[c] = c

    for i in range(k):
        span = 1 << i
        vals = best.reshape(-1, 2, span)
        args = arg.reshape(-1, 2, span)
        take = vals[:, 0, :] > vals[:, 1, :]
        vals[:, 1, :] = np.where(take, vals[:, 0, :], vals[:, 1, :])
        args[:, 1, :] = np.where(take, args[:, 0, :], args[:, 1, :])

    full = size - 1
    top_mask, top_value = entries[0]
    result = MaskPair(top_value, top_mask, 0)
    for c, mask, value in compact_entries:
        partner = full ^ c
        total = value + int(best[partner])
        if total > result.value:
            result = MaskPair(total, mask, decompress(int(arg[partner])))
    return result


def best_disjoint_pair(table: MaskTable, strategy: str = "auto", *, subset_bit_limit: int = 20) -> MaskPair:
    """Best pair of disjoint masks of `table` using the chosen strategy."""
    if strategy not in COMBINER_STRATEGIES:
        raise ValueError(f"Unsupported combiner: {strategy!r}")
    width = len(used_bits(table))
    if strategy == "auto":
        strategy = "subset" if width <= subset_bit_limit else "pairwise"
    elif strategy == "subset" and width > subset_bit_limit:
        # The transform array would need 2 ** width cells.
        logger.warning(
            "Table uses %d valves, over the subset limit of %d; using the pairwise scan",
            width, subset_bit_limit,
        )
        strategy = "pairwise"
    logger.debug("Combining %d masks with the %s strategy", len(table), strategy)
    if strategy == "subset":
        return combine_subset(table)
    return combine_pairwise(table)
