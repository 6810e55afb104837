"""Simulation primitives for the elevator bank."""

from .building import Building
from .config import SimulationConfig
from .elevator import Elevator, MovementState
from .errors import FloorOutOfRangeError, InvariantViolation, SimulationError
from .registry import FloorStatus, RequestRegistry
from .simulation import MetricsSnapshot, Simulation

__all__ = [
    "Building",
    "Elevator",
    "FloorOutOfRangeError",
    "FloorStatus",
    "InvariantViolation",
    "MetricsSnapshot",
    "MovementState",
    "RequestRegistry",
    "Simulation",
    "SimulationConfig",
    "SimulationError",
]
