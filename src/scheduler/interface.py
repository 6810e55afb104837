from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Tuple


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for scheduling decisions."""

    elevator_id: int
    current_floor: int
    queue: Tuple[int, ...]
    busy_until: float = 0.0

    @property
    def is_idle(self) -> bool:
        return not self.queue

    def targets(self, floor: int) -> bool:
        return floor in self.queue


class Scheduler(Protocol):
    """Strategy interface for choosing which elevator serves a floor call."""

    def select_elevator(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        floor: int,
        current_time: float,
    ) -> Optional[int]:
        """
        Return the id of the elevator that should add ``floor`` to its queue.

        Elevators already targeting ``floor`` are never eligible. ``None``
        means no elevator is eligible.
        """
        ...
