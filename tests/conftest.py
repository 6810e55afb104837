import pytest

from simulation import Building, Elevator, Simulation, SimulationConfig


def make_building(*floors: int, num_floors: int = 10, **scheduler_options) -> Building:
    elevators = [Elevator(i, current_floor=floor) for i, floor in enumerate(floors)]
    return Building(
        num_floors=num_floors,
        elevators=elevators,
        scheduler_options=scheduler_options,
    )


@pytest.fixture
def config():
    return SimulationConfig()


@pytest.fixture
def simulation(config):
    return Simulation.from_config(config)


@pytest.fixture
def single_car():
    return Simulation.from_config(SimulationConfig(total_elevators=1))
