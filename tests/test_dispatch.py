import pytest

from conftest import make_building
from scheduler import ElevatorSnapshot, NearestIdleScheduler, get_scheduler
from simulation import FloorOutOfRangeError, FloorStatus, InvariantViolation


def snapshot(elevator_id, floor, queue=(), busy_until=0.0):
    return ElevatorSnapshot(
        elevator_id=elevator_id, current_floor=floor, queue=tuple(queue), busy_until=busy_until
    )


class TestNearestIdleScheduler:
    def test_prefers_nearest_idle(self):
        elevators = [snapshot(0, 0), snapshot(1, 9), snapshot(2, 5)]
        assert NearestIdleScheduler().select_elevator(elevators, 6, 0) == 2

    def test_tie_goes_to_lowest_id(self):
        elevators = [snapshot(1, 3), snapshot(0, 3)]
        assert NearestIdleScheduler().select_elevator(elevators, 5, 0) == 0

    def test_idle_beats_closer_busy(self):
        elevators = [snapshot(0, 6, queue=[9]), snapshot(1, 0)]
        assert NearestIdleScheduler().select_elevator(elevators, 6, 0) == 1

    def test_falls_back_to_nearest_busy(self):
        elevators = [snapshot(0, 0, queue=[2]), snapshot(1, 8, queue=[9]), snapshot(2, 5, queue=[1])]
        assert NearestIdleScheduler().select_elevator(elevators, 7, 0) == 1

    def test_skips_elevators_already_targeting_floor(self):
        elevators = [snapshot(0, 4, queue=[6]), snapshot(1, 0, queue=[2])]
        assert NearestIdleScheduler().select_elevator(elevators, 6, 0) == 1

    def test_no_candidates(self):
        elevators = [snapshot(0, 4, queue=[6])]
        assert NearestIdleScheduler().select_elevator(elevators, 6, 0) is None

    def test_dwelling_car_is_busy_when_respecting_dwell(self):
        elevators = [snapshot(0, 5, busy_until=2000), snapshot(1, 0)]
        assert NearestIdleScheduler().select_elevator(elevators, 6, 1000) == 0
        assert NearestIdleScheduler(respect_dwell=True).select_elevator(elevators, 6, 1000) == 1
        assert NearestIdleScheduler(respect_dwell=True).select_elevator(elevators, 6, 2000) == 0

    def test_unknown_scheduler(self):
        with pytest.raises(ValueError):
            get_scheduler("scan")


class TestBuildingDispatch:
    def test_second_call_is_a_noop(self):
        building = make_building(0, 0, 0)
        first = building.request_floor(4, 0)
        second = building.request_floor(4, 0)

        assert first is not None
        assert second is None
        assert sum(e.targets(4) for e in building.elevators) == 1
        assert building.status_of(4) is FloorStatus.WAITING

    def test_appends_to_end_of_queue(self):
        building = make_building(5, 5)
        building.elevators[0].queue.extend([9])
        building.elevators[1].queue.extend([8])

        elevator = building.request_floor(1, 0)

        assert elevator.elevator_id == 0
        assert elevator.queue == [9, 1]

    def test_rejects_floor_another_car_is_pursuing(self):
        building = make_building(0, 0)
        building.elevators[1].queue.append(6)

        assert building.request_floor(6, 0) is None
        assert building.elevators[0].queue == []
        assert building.status_of(6) is FloorStatus.IDLE

    def test_rejects_arrived_floor(self):
        building = make_building(0)
        building.registry.mark_arrived(2)
        assert building.request_floor(2, 0) is None

    @pytest.mark.parametrize("floor", [-1, 10, 42])
    def test_out_of_range_floor(self, floor):
        building = make_building(0)
        with pytest.raises(FloorOutOfRangeError):
            building.request_floor(floor, 0)

    def test_empty_pool_is_an_invariant_violation(self):
        class NoChoice:
            def select_elevator(self, elevator_state, floor, current_time):
                return None

        building = make_building(0)
        building.scheduler = NoChoice()

        with pytest.raises(InvariantViolation):
            building.request_floor(3, 0)
        assert building.status_of(3) is FloorStatus.IDLE
