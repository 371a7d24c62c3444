"""
Reader for valve scan listings such as::

    Valve AA has flow rate=0; tunnels lead to valves DD, II, BB
    Valve HH has flow rate=22; tunnel leads to valve GG
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Tuple, Union

from .errors import MalformedRecordError
from .graph import Valve, ValveGraph

ValveRecord = Tuple[str, int, Tuple[str, ...]]

_LINE = re.compile(
    r"Valve\s+(?P<name>[A-Za-z0-9_]+)\s+has\s+flow\s+rate\s*=\s*(?P<rate>\d+)\s*;"
    r"\s*tunnels?\s+leads?\s+to\s+valves?\s+(?P<tunnels>[A-Za-z0-9_]+(?:\s*,\s*[A-Za-z0-9_]+)*)\s*$"
)


def parse_line(line: str) -> ValveRecord:
    match = _LINE.match(line.strip())
    if match is None:
        raise MalformedRecordError(f"Unrecognised valve record: {line!r}")
    tunnels = tuple(t.strip() for t in match.group("tunnels").split(","))
    return match.group("name"), int(match.group("rate")), tunnels


def parse_scan(text: str) -> List[ValveRecord]:
    """Parse every non-blank line of a scan into ``(name, rate, tunnels)`` records."""
    records: List[ValveRecord] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(parse_line(line))
        except MalformedRecordError as exc:
            raise MalformedRecordError(f"line {lineno}: {exc}") from exc
    return records


def load_graph(source: Union[str, Path]) -> ValveGraph:
    """Read a scan file and build its `ValveGraph`."""
    text = Path(source).read_text(encoding="utf-8")
    return ValveGraph(Valve(name, rate, tunnels) for name, rate, tunnels in parse_scan(text))
