from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .elevator import Elevator
from .errors import FloorOutOfRangeError, InvariantViolation
from .registry import FloorStatus, RequestRegistry
from scheduler import ElevatorSnapshot, Scheduler, get_scheduler

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Container for the elevator bank and the per-floor call registry."""

    num_floors: int
    elevators: List[Elevator] = field(default_factory=list)
    scheduler_name: str = "nearest_idle"
    scheduler_options: dict = field(default_factory=dict)
    scheduler: Scheduler = field(init=False)
    registry: RequestRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.registry = RequestRegistry(self.num_floors)
        self.scheduler = get_scheduler(self.scheduler_name, **self.scheduler_options)
        self.elevators.sort(key=lambda e: e.elevator_id)

    def check_floor(self, floor_number: int) -> None:
        if not 0 <= floor_number < self.num_floors:
            raise FloorOutOfRangeError(floor_number, self.num_floors)

    def status_of(self, floor_number: int) -> FloorStatus:
        self.check_floor(floor_number)
        return self.registry.status_of(floor_number)

    def rejection_reason(self, floor_number: int) -> Optional[str]:
        status = self.registry.status_of(floor_number)
        if status is not FloorStatus.IDLE:
            return f"floor already {status.value}"
        if any(elevator.targets(floor_number) for elevator in self.elevators):
            return "an elevator is already headed there"
        return None

    def request_floor(self, floor_number: int, current_time: float) -> Optional[Elevator]:
        """Queue ``floor_number`` on one elevator, or return None if the call is a duplicate."""
        self.check_floor(floor_number)
        if self.rejection_reason(floor_number) is not None:
            return None

        self.registry.mark_waiting(floor_number)
        elevator_id = self.scheduler.select_elevator(
            self._snapshot_elevators(), floor_number, current_time
        )
        elevator = self._get_elevator(elevator_id) if elevator_id is not None else None
        if elevator is None:
            self.registry.clear(floor_number)
            raise InvariantViolation(
                f"No eligible elevator for floor {floor_number} after the duplicate check passed"
            )
        elevator.assign_target(floor_number)
        logger.info("Floor %d assigned to elevator %d", floor_number, elevator.elevator_id)
        return elevator

    def snapshot(self) -> dict:
        return {
            "floors": self.registry.snapshot(),
            "elevators": [
                {
                    "id": elevator.elevator_id,
                    "current_floor": elevator.current_floor,
                    "movement_state": elevator.movement_state.value,
                    "queue": list(elevator.queue),
                }
                for elevator in self.elevators
            ],
        }

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [
            ElevatorSnapshot(
                elevator_id=elevator.elevator_id,
                current_floor=elevator.current_floor,
                queue=tuple(elevator.queue),
                busy_until=elevator.busy_until,
            )
            for elevator in self.elevators
        ]

    def _get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None
