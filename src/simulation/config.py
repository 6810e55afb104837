from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping

# External option names accepted alongside the snake_case field names.
_ALIASES: Dict[str, str] = {
    "totalElevators": "total_elevators",
    "totalFloors": "total_floors",
    "travelTimePerFloor": "tick_interval_ms",
    "tickIntervalMs": "tick_interval_ms",
    "dwellTime": "dwell_time_ms",
    "dwellTimeMs": "dwell_time_ms",
    "schedulerOptions": "scheduler_options",
}


@dataclass
class SimulationConfig:
    """Building layout and timing used by the engine and the server."""

    total_elevators: int = 5
    total_floors: int = 10
    tick_interval_ms: int = 1000
    dwell_time_ms: int = 2000
    scheduler: str = "nearest_idle"
    scheduler_options: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "SimulationConfig":
        known = set(cls.__dataclass_fields__)
        values: Dict[str, object] = {}
        for key, value in (data or {}).items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown configuration option '{key}'")
            values[name] = value
        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        if self.total_elevators < 1:
            raise ValueError("total_elevators must be at least 1")
        if self.total_floors < 1:
            raise ValueError("total_floors must be at least 1")
        if self.tick_interval_ms <= 0:
            raise ValueError("tick_interval_ms must be positive")
        if self.dwell_time_ms <= 0:
            raise ValueError("dwell_time_ms must be positive")
