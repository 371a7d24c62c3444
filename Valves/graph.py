from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Tuple

from .errors import GraphConfigurationError, MissingStartValveError, UnresolvedNeighborError


@dataclass(frozen=True)
class Valve:
    """A node of the tunnel network: its name, flow rate and tunnels."""
    name: str
    flow_rate: int
    tunnels: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise GraphConfigurationError("valve name cannot be empty")
        if isinstance(self.tunnels, str):
            raise GraphConfigurationError(
                f"valve {self.name!r} tunnels must be a sequence of names, not the string {self.tunnels!r}"
            )
        if int(self.flow_rate) < 0:
            raise GraphConfigurationError(f"valve {self.name!r} has a negative flow rate")
        # Accept any iterable of names but store an immutable tuple.
        object.__setattr__(self, "flow_rate", int(self.flow_rate))
        object.__setattr__(self, "tunnels", tuple(self.tunnels))


class ValveGraph(Mapping[str, Valve]):
    """Immutable mapping of valve name to `Valve`, in record order.

    Every tunnel must lead to a valve of the same graph; this is checked on
    construction so later stages never see a dangling reference.
    """

    def __init__(self, valves: Iterable[Valve]):
        table = {}
        for valve in valves:
            if valve.name in table:
                raise GraphConfigurationError(f"duplicate valve {valve.name!r}")
            table[valve.name] = valve
        for valve in table.values():
            for neighbor in valve.tunnels:
                if neighbor not in table:
                    raise UnresolvedNeighborError(valve.name, neighbor)
        self._valves = MappingProxyType(table)

    @classmethod
    def from_records(cls, records: Iterable[Tuple[str, int, Iterable[str]]]) -> "ValveGraph":
        """Build a graph from plain ``(name, flow_rate, tunnels)`` records."""
        return cls(Valve(name, rate, tunnels) for name, rate, tunnels in records)

    def __getitem__(self, name: str) -> Valve:
        return self._valves[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._valves)

    def __len__(self) -> int:
        return len(self._valves)

    def __repr__(self) -> str:
        return f"ValveGraph({len(self)} valves)"

    def require(self, start: str) -> Valve:
        """Return the start valve or raise `MissingStartValveError`."""
        try:
            return self._valves[start]
        except KeyError:
            raise MissingStartValveError(start) from None

    def useful_valves(self) -> List[str]:
        """Names of valves worth opening (positive flow rate)."""
        return [name for name, valve in self._valves.items() if valve.flow_rate > 0]

    def is_symmetric(self) -> bool:
        return all(
            name in self._valves[neighbor].tunnels
            for name, valve in self._valves.items()
            for neighbor in valve.tunnels
        )

    def scaled(self, factor: int) -> "ValveGraph":
        """Copy of the graph with every flow rate multiplied by `factor`."""
        return ValveGraph(
            Valve(v.name, v.flow_rate * int(factor), v.tunnels) for v in self._valves.values()
        )
