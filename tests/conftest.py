"""Shared fixtures for the cleaning simulation tests."""

import pytest

from cleaning_sim.config import (SimulationConfig, FloorSpec, OccupancyConfig,
                                 TimingConfig, TimetableEntry)


class ScriptedRng:
    """Stands in for numpy's Generator: random() replays fixed draws."""

    def __init__(self, values=(), default=0.99):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def random(self):
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        return self.default


def make_config(floors, timetable=(), nominal=True, **kwargs):
    """Build a config from plain room-id lists."""
    occupancy = OccupancyConfig(deviation_probability=0.0) if nominal else OccupancyConfig()
    return SimulationConfig(
        floors=[FloorSpec(room_ids=list(rooms)) for rooms in floors],
        timetable=[TimetableEntry(*entry) for entry in timetable],
        occupancy=occupancy,
        timing=kwargs.pop('timing', TimingConfig()),
        **kwargs
    )


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def two_room_config():
    return make_config([[10, 11]])


@pytest.fixture
def three_floor_config():
    return make_config([[1], [2], [3]])
