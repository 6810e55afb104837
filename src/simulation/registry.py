from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class FloorStatus(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    ARRIVED = "arrived"

    @property
    def label(self) -> str:
        """Text shown on the floor's call button."""
        return _LABELS[self]

    @property
    def accepts_calls(self) -> bool:
        return self is FloorStatus.IDLE


_LABELS = {
    FloorStatus.IDLE: "Call",
    FloorStatus.WAITING: "Waiting...",
    FloorStatus.ARRIVED: "Arrived",
}


@dataclass
class RequestRegistry:
    """Per-floor call status. Floors without an entry are idle."""

    num_floors: int
    _statuses: Dict[int, FloorStatus] = field(default_factory=dict)

    def status_of(self, floor: int) -> FloorStatus:
        return self._statuses.get(floor, FloorStatus.IDLE)

    def mark_waiting(self, floor: int) -> None:
        self._statuses[floor] = FloorStatus.WAITING

    def mark_arrived(self, floor: int) -> None:
        self._statuses[floor] = FloorStatus.ARRIVED

    def clear(self, floor: int) -> None:
        self._statuses.pop(floor, None)

    def reset_if(self, floor: int, expected: FloorStatus) -> bool:
        """Return the floor to idle only if it still holds ``expected``."""
        if self.status_of(floor) is not expected:
            return False
        self.clear(floor)
        return True

    def snapshot(self) -> list:
        return [
            {
                "floor": floor,
                "status": self.status_of(floor).value,
                "label": self.status_of(floor).label,
                "enabled": self.status_of(floor).accepts_calls,
            }
            for floor in range(self.num_floors)
        ]
