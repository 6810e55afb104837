import json
from pathlib import Path

from run_scenario import build_simulation, run_simulation

SCENARIO = Path(__file__).resolve().parent.parent / "scripts" / "scenarios" / "two_calls.json"


def test_two_calls_scenario():
    config = json.loads(SCENARIO.read_text())
    simulation = build_simulation(config)

    arrivals = run_simulation(simulation, config)

    assert [(a["floor"], a["elevator_id"], a["time"]) for a in arrivals] == [
        (3, 0, 2000),
        (7, 1, 6000),
        (3, 0, 9000),
    ]
    metrics = simulation.metrics.snapshot(simulation.current_time)
    assert metrics.accepted_calls == 3
    assert metrics.rejected_calls == 1
    assert simulation.current_time == 20000


def test_calls_after_the_run_are_ignored():
    config = {"config": {"totalElevators": 1}, "calls": [{"time": 5000, "floor": 2}], "duration": 3}
    simulation = build_simulation(config)

    assert run_simulation(simulation, config) == []
    assert simulation.current_time == 3000
