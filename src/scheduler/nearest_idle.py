from __future__ import annotations

from typing import Iterable, Optional

from .interface import ElevatorSnapshot
from .utils import nearest, partition_idle


class NearestIdleScheduler:
    """Sends the closest idle elevator, falling back to the closest busy one."""

    def __init__(self, respect_dwell: bool = False) -> None:
        self.respect_dwell = respect_dwell

    def select_elevator(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        floor: int,
        current_time: float,
    ) -> Optional[int]:
        candidates = sorted(
            (e for e in elevator_state if not e.targets(floor)),
            key=lambda e: e.elevator_id,
        )
        if not candidates:
            return None
        idle, _ = partition_idle(candidates, current_time, self.respect_dwell)
        chosen = nearest(idle or candidates, floor)
        return chosen.elevator_id if chosen is not None else None
