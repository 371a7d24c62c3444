import sys
from itertools import permutations
from pathlib import Path
from typing import Dict

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from Valves.errors import InfeasiblePlanError
from Valves.graph import Valve, ValveGraph
from Valves.parsing import parse_scan
from Valves.problem import ValveProblem


EXAMPLE_SCAN = """\
Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
Valve BB has flow rate=13; tunnels lead to valves CC, AA
Valve CC has flow rate=2; tunnels lead to valves DD, BB
Valve DD has flow rate=20; tunnels lead to valves CC, AA, EE
Valve EE has flow rate=3; tunnels lead to valves FF, DD
Valve FF has flow rate=0; tunnels lead to valves EE, GG
Valve GG has flow rate=0; tunnels lead to valves FF, HH
Valve HH has flow rate=22; tunnel leads to valve GG
Valve II has flow rate=0; tunnels lead to valves AA, JJ
Valve JJ has flow rate=21; tunnel leads to valve II
"""


@pytest.fixture
def example_text():
    return EXAMPLE_SCAN


@pytest.fixture
def example_graph():
    return ValveGraph.from_records(parse_scan(EXAMPLE_SCAN))


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "example.txt"
    path.write_text(EXAMPLE_SCAN, encoding="utf-8")
    return path


def random_graph(seed: int, n_valves: int = 7, extra_edges: int = 3, max_rate: int = 15) -> ValveGraph:
    """Connected undirected graph with start valve AA at rate 0."""
    rng = np.random.default_rng(seed)
    names = ["AA"] + [f"V{i}" for i in range(1, n_valves)]
    links = {name: set() for name in names}
    order = list(rng.permutation(n_valves))
    for a, b in zip(order, order[1:]):
        links[names[a]].add(names[b])
        links[names[b]].add(names[a])
    for _ in range(extra_edges):
        a, b = rng.choice(n_valves, size=2, replace=False)
        links[names[a]].add(names[b])
        links[names[b]].add(names[a])
    rates = [0] + [int(r) for r in rng.integers(0, max_rate + 1, size=n_valves - 1)]
    return ValveGraph(
        Valve(name, rate, tuple(sorted(links[name]))) for name, rate in zip(names, rates)
    )


def brute_force_table(problem: ValveProblem) -> Dict[int, int]:
    """Best value per mask by replaying every ordering of useful valves."""
    useful = problem.get_problem_info()["useful_valves"]
    table: Dict[int, int] = {}
    for size in range(len(useful) + 1):
        for order in permutations(useful, size):
            try:
                timeline = problem.schedule(order)
            except InfeasiblePlanError:
                continue
            mask = 0
            for name in order:
                mask |= 1 << problem.distances.index(name)
            value = sum(a.gained for a in timeline)
            table[mask] = max(table.get(mask, 0), value)
    return table
