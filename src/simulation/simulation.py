from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Generator, List, Optional

import simpy

from .building import Building
from .config import SimulationConfig
from .elevator import Elevator
from .registry import FloorStatus

logger = logging.getLogger(__name__)


@dataclass
class MetricsSnapshot:
    time: float
    accepted_calls: int
    rejected_calls: int
    arrivals: int
    average_wait: float
    wait_p95: float


class MetricsTracker:
    def __init__(self) -> None:
        self.wait_times: List[float] = []
        self.accepted_calls: int = 0
        self.rejected_calls: int = 0
        self._requested_at: Dict[int, float] = {}

    def record_call(self, floor: int, time: float) -> None:
        self.accepted_calls += 1
        self._requested_at[floor] = time

    def record_rejection(self) -> None:
        self.rejected_calls += 1

    def record_arrival(self, floor: int, time: float) -> None:
        requested_at = self._requested_at.pop(floor, None)
        if requested_at is not None:
            self.wait_times.append(time - requested_at)

    def _average(self, values: List[float]) -> float:
        if not values:
            return 0.0
        return sum(values) / len(values)

    def _percentile(self, values: List[float], percentile: float) -> float:
        if not values:
            return 0.0
        sorted_vals = sorted(values)
        k = (len(sorted_vals) - 1) * percentile
        f = math.floor(k)
        c = math.ceil(k)
        if f == c:
            return float(sorted_vals[int(k)])
        d0 = sorted_vals[int(f)] * (c - k)
        d1 = sorted_vals[int(c)] * (k - f)
        return float(d0 + d1)

    def snapshot(self, time: float) -> MetricsSnapshot:
        return MetricsSnapshot(
            time=time,
            accepted_calls=self.accepted_calls,
            rejected_calls=self.rejected_calls,
            arrivals=len(self.wait_times),
            average_wait=self._average(self.wait_times),
            wait_p95=self._percentile(self.wait_times, 0.95),
        )


class Simulation:
    """Fixed-tick elevator bank simulation driven by a simpy clock in milliseconds.

    All mutation happens either inside a tick or inside ``request_floor``;
    the caller is responsible for never running the two concurrently.
    """

    def __init__(
        self,
        building: Building,
        tick_interval_ms: float = 1000,
        dwell_time_ms: float = 2000,
    ) -> None:
        self.building = building
        self.tick_interval_ms = tick_interval_ms
        self.dwell_time_ms = dwell_time_ms
        self.env = simpy.Environment()
        self.metrics = MetricsTracker()
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.ticks: int = 0
        self.env.process(self._tick_loop())

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "Simulation":
        elevators = [Elevator(i) for i in range(config.total_elevators)]
        building = Building(
            num_floors=config.total_floors,
            elevators=elevators,
            scheduler_name=config.scheduler,
            scheduler_options=dict(config.scheduler_options),
        )
        return cls(
            building=building,
            tick_interval_ms=config.tick_interval_ms,
            dwell_time_ms=config.dwell_time_ms,
        )

    @property
    def current_time(self) -> float:
        return self.env.now

    def step(self) -> None:
        """Advance the clock by one tick period."""
        self.advance(self.tick_interval_ms)

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.step()

    def advance(self, duration_ms: float) -> None:
        if duration_ms < 0:
            raise ValueError("Cannot advance the clock backwards")
        if duration_ms == 0:
            return
        self.env.run(until=self.env.now + duration_ms)

    def request_floor(self, floor: int) -> bool:
        """Handle a call button press. Returns False when the call is a no-op."""
        elevator = self.building.request_floor(floor, self.current_time)
        if elevator is None:
            reason = self.building.rejection_reason(floor)
            self.metrics.record_rejection()
            logger.debug("Call for floor %d rejected: %s", floor, reason)
            self._emit("rejected", {"floor": floor, "reason": reason, "time": self.current_time})
            return False
        self.metrics.record_call(floor, self.current_time)
        self._emit(
            "dispatch",
            {"floor": floor, "elevator_id": elevator.elevator_id, "time": self.current_time},
        )
        return True

    def floor_status(self, floor: int) -> FloorStatus:
        return self.building.status_of(floor)

    def elevator_snapshot(self) -> List[dict]:
        return self.building.snapshot()["elevators"]

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _tick_loop(self) -> Generator[simpy.events.Event, None, None]:
        while True:
            self._tick()
            yield self.env.timeout(self.tick_interval_ms)

    def _tick(self) -> None:
        now = self.current_time
        for elevator in self.building.elevators:
            floor = elevator.step(now, self.dwell_time_ms)
            if floor is not None:
                self._handle_arrival(elevator, floor)
        self.ticks += 1
        logger.debug("Tick %d at %.0f ms", self.ticks, now)
        self._emit("tick", {"time": now, "building": self.building.snapshot()})

    def _handle_arrival(self, elevator: Elevator, floor: int) -> None:
        now = self.current_time
        self.building.registry.mark_arrived(floor)
        self.metrics.record_arrival(floor, now)
        logger.info("Elevator %d arrived at floor %d", elevator.elevator_id, floor)
        self._emit("arrival", {"floor": floor, "elevator_id": elevator.elevator_id, "time": now})
        self.env.process(self._reset_after_dwell(floor))

    def _reset_after_dwell(self, floor: int) -> Generator[simpy.events.Event, None, None]:
        yield self.env.timeout(self.dwell_time_ms)
        if self.building.registry.reset_if(floor, FloorStatus.ARRIVED):
            logger.debug("Floor %d reset to idle", floor)
            self._emit("reset", {"floor": floor, "time": self.current_time})

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
