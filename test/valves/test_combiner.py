import logging
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from conftest import brute_force_table, random_graph
from Valves.combiner import MaskPair, best_disjoint_pair, combine_pairwise, combine_subset, used_bits
from Valves.config import PlannerConfig
from Valves.graph import ValveGraph
from Valves.planner import plan_dual
from Valves.problem import ValveProblem
from Valves.search import MaskTable

COMBINERS = [combine_pairwise, combine_subset]


def _table(entries):
    table = MaskTable()
    for mask, value in entries.items():
        table.record(mask, value)
    return table


def _brute_pair(entries):
    best = max(entries.values(), default=0)
    for a, va in entries.items():
        for b, vb in entries.items():
            if a & b == 0:
                best = max(best, va + vb)
    return best


@pytest.mark.parametrize("combine", COMBINERS)
def test_small_table(combine):
    table = _table({0: 0, 0b001: 10, 0b010: 7, 0b011: 12, 0b100: 5})
    pair = combine(table)
    assert pair.value == 17
    assert pair.first_mask & pair.second_mask == 0
    assert table[pair.first_mask] + table.get(pair.second_mask, 0) == 17


@pytest.mark.parametrize("combine", COMBINERS)
def test_empty_table_is_zero(combine):
    assert combine(MaskTable()) == MaskPair(0, 0, 0)


@pytest.mark.parametrize("combine", COMBINERS)
def test_lone_entry_pairs_with_empty_mask(combine):
    pair = combine(_table({0b101: 9}))
    assert pair == MaskPair(9, 0b101, 0)


@pytest.mark.parametrize("combine", COMBINERS)
def test_high_bits(combine):
    table = _table({1 << 40: 3, 1 << 63: 4, (1 << 40) | (1 << 63): 6})
    pair = combine(table)
    assert pair.value == 7
    assert {pair.first_mask, pair.second_mask} == {1 << 40, 1 << 63}


@pytest.mark.parametrize("seed", range(8))
def test_strategies_agree_with_brute_force(seed):
    rng = np.random.default_rng(seed)
    entries = {}
    for _ in range(40):
        mask = int(rng.integers(0, 1 << 10))
        entries[mask] = max(entries.get(mask, 0), int(rng.integers(0, 100)))
    table = _table(entries)
    expected = _brute_pair(entries)
    for combine in COMBINERS:
        pair = combine(table)
        assert pair.value == expected
        assert pair.first_mask & pair.second_mask == 0


@pytest.mark.parametrize("seed", range(4))
def test_search_tables_combine_like_brute_force(seed):
    problem = ValveProblem(random_graph(seed), 12)
    entries = brute_force_table(problem)
    pair = best_disjoint_pair(_table(entries))
    assert pair.value == _brute_pair(entries)
    assert pair.value >= max(entries.values())


def test_auto_falls_back_to_pairwise():
    table = _table({0b0001: 4, 0b0110: 5, 0b1000: 1})
    assert used_bits(table) == [0, 1, 2, 3]
    assert best_disjoint_pair(table, subset_bit_limit=2).value == 9
    assert best_disjoint_pair(table, "subset").value == 9
    assert best_disjoint_pair(table, "pairwise").value == 9


def test_unknown_strategy():
    with pytest.raises(ValueError):
        best_disjoint_pair(MaskTable(), "greedy")


def test_pair_must_be_disjoint():
    with pytest.raises(ValueError):
        MaskPair(1, 0b11, 0b10)


def test_forced_subset_over_limit_uses_pairwise(caplog):
    entries = {0b0001: 5, 0b0010: 4, 0b0110: 9, 0b1000: 3}
    table = _table(entries)
    with caplog.at_level(logging.WARNING, logger="Valves.combiner"):
        pair = best_disjoint_pair(table, "subset", subset_bit_limit=2)
    assert pair == combine_pairwise(table)
    assert pair.value == _brute_pair(entries)
    assert "over the subset limit" in caplog.text


def test_wide_star_graph_with_forced_subset():
    names = [f"V{i}" for i in range(1, 41)]
    graph = ValveGraph.from_records(
        [("AA", 0, names)] + [(name, rate, ["AA"]) for rate, name in enumerate(names, start=1)]
    )
    # Each agent reaches one valve with two minutes left: 2 * 40 + 2 * 39.
    expected = 158
    assert plan_dual(graph, PlannerConfig(dual_agent_budget=4, combiner="subset")).value == expected
    assert plan_dual(graph, PlannerConfig(dual_agent_budget=4)).value == expected
