"""CLI for replaying timed floor calls defined in JSON scenario files."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from simulation import Simulation, SimulationConfig


def build_simulation(config: Dict) -> Simulation:
    return Simulation.from_config(SimulationConfig.from_dict(config.get("config", {})))


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    """Replay the scenario's calls and return the arrival log."""
    duration = config.get("duration", 30)
    calls = sorted(config.get("calls", []), key=lambda call: call.get("time", 0))
    arrivals: List[Dict] = []
    simulation.on_event("arrival", arrivals.append)

    end_time = duration * simulation.tick_interval_ms
    for call in calls:
        call_time = call.get("time", 0)
        if call_time > end_time:
            break
        simulation.advance(call_time - simulation.current_time)
        simulation.request_floor(call["floor"])
    simulation.advance(max(0, end_time - simulation.current_time))
    return arrivals


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the arrival log and metrics as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    arrivals = run_simulation(simulation, config)

    final_metrics = asdict(simulation.metrics.snapshot(simulation.current_time))
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 30),
        "final_metrics": final_metrics,
        "arrivals": arrivals,
        "elevators": simulation.elevator_snapshot(),
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print("Arrivals:")
    for arrival in arrivals:
        print(f"  t={arrival['time']:.0f}ms elevator {arrival['elevator_id']} -> floor {arrival['floor']}")
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved results to {args.output}")


if __name__ == "__main__":
    main()
