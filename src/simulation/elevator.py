from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class MovementState(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    DWELLING = "dwelling"


@dataclass
class Elevator:
    """A single car that serves its queued floors in insertion order."""

    elevator_id: int
    current_floor: int = 0
    queue: List[int] = field(default_factory=list)
    movement_state: MovementState = MovementState.IDLE
    busy_until: float = 0.0

    @property
    def direction(self) -> int:
        if not self.queue:
            return 0
        if self.current_floor < self.queue[0]:
            return 1
        if self.current_floor > self.queue[0]:
            return -1
        return 0

    def is_dwelling(self, current_time: float) -> bool:
        return current_time < self.busy_until

    def targets(self, floor: int) -> bool:
        return floor in self.queue

    def assign_target(self, floor: int) -> None:
        if floor not in self.queue:
            self.queue.append(floor)

    def step(self, current_time: float, dwell_time: float) -> Optional[int]:
        """Advance one tick and return the floor arrived at, if any.

        Dwelling is checked first, then an empty queue, then whether the car
        already sits on its next target. Otherwise it moves one floor and
        opens its doors on the same tick if that move reaches the target.
        """
        if self.is_dwelling(current_time):
            self.movement_state = MovementState.DWELLING
            return None

        if not self.queue:
            self.movement_state = MovementState.IDLE
            return None

        target = self.queue[0]
        if self.current_floor == target:
            return self._arrive(current_time, dwell_time)

        self.current_floor += 1 if target > self.current_floor else -1
        self.movement_state = MovementState.MOVING
        if self.current_floor == target:
            return self._arrive(current_time, dwell_time)
        return None

    def _arrive(self, current_time: float, dwell_time: float) -> int:
        floor = self.queue.pop(0)
        self.busy_until = current_time + dwell_time
        self.movement_state = MovementState.DWELLING
        return floor
