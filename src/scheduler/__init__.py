from __future__ import annotations

from typing import Dict, Type

from .interface import ElevatorSnapshot, Scheduler
from .nearest_idle import NearestIdleScheduler

__all__ = [
    "ElevatorSnapshot",
    "NearestIdleScheduler",
    "Scheduler",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "nearest_idle": NearestIdleScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
