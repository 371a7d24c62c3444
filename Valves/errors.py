"""Exceptions raised while loading valve scans and checking plans."""


class MalformedRecordError(ValueError):
    """A scan line does not describe a valve."""


class GraphConfigurationError(ValueError):
    """The valve graph cannot be planned over as given."""


class UnresolvedNeighborError(GraphConfigurationError):
    def __init__(self, valve: str, neighbor: str):
        super().__init__(f"Valve {valve!r} has a tunnel to unknown valve {neighbor!r}")
        self.valve = valve
        self.neighbor = neighbor


class MissingStartValveError(GraphConfigurationError):
    def __init__(self, start: str):
        super().__init__(f"Start valve {start!r} is not part of the graph")
        self.start = start


class InfeasiblePlanError(ValueError):
    """An explicit activation order cannot be carried out."""
