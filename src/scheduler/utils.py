from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .interface import ElevatorSnapshot


def floor_distance(elevator: ElevatorSnapshot, floor: int) -> int:
    return abs(elevator.current_floor - floor)


def partition_idle(
    elevators: Iterable[ElevatorSnapshot],
    current_time: float,
    respect_dwell: bool = False,
) -> Tuple[List[ElevatorSnapshot], List[ElevatorSnapshot]]:
    """Split elevators into (idle, busy), preserving their order.

    With ``respect_dwell`` an empty-queue car still holding its doors open
    counts as busy.
    """

    idle: List[ElevatorSnapshot] = []
    busy: List[ElevatorSnapshot] = []
    for elevator in elevators:
        dwelling = respect_dwell and current_time < elevator.busy_until
        if elevator.is_idle and not dwelling:
            idle.append(elevator)
        else:
            busy.append(elevator)
    return idle, busy


def nearest(elevators: Iterable[ElevatorSnapshot], floor: int) -> Optional[ElevatorSnapshot]:
    """Closest elevator to ``floor``; the first one seen wins a tie."""

    best: Optional[ElevatorSnapshot] = None
    for elevator in elevators:
        if best is None or floor_distance(elevator, floor) < floor_distance(best, floor):
            best = elevator
    return best
