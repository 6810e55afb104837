from __future__ import annotations


class SimulationError(Exception):
    """Base class for engine errors."""


class FloorOutOfRangeError(SimulationError, ValueError):
    def __init__(self, floor: int, total_floors: int) -> None:
        super().__init__(f"Floor {floor} is outside [0, {total_floors})")
        self.floor = floor
        self.total_floors = total_floors


class InvariantViolation(SimulationError):
    """Raised when internal bookkeeping reaches a state that should be unreachable."""
