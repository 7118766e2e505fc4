"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from cleaning_sim.config import (ConfigurationError, SimulationConfig, FloorSpec,
                                 TimetableEntry, TimingConfig, OccupancyConfig,
                                 default_config, load_config)

from conftest import make_config

CONFIG_DIR = Path(__file__).resolve().parent.parent / "configs"


class TestDefaultConfig:
    def test_three_floors_sixteen_rooms(self):
        config = default_config()
        assert len(config.floors) == 3
        assert sum(len(f.room_ids) for f in config.floors) == 16
        assert config.floors[0].room_ids == [40, 41, 42, 43, 44, 45]

    def test_default_timing(self):
        timing = default_config().timing
        assert timing.room_travel_time == 2
        assert timing.room_cleaning_time == 5
        assert timing.elevator_travel_time == 5
        assert timing.start_hour == 8
        assert timing.availability_interval == 5

    def test_default_occupancy(self):
        occ = default_config().occupancy
        assert occ.deviation_probability == pytest.approx(0.30)
        assert occ.cancellation_probability == pytest.approx(0.20)
        assert occ.unexpected_probability == pytest.approx(0.40)

    def test_default_is_valid(self):
        default_config().validate()


class TestValidation:
    def test_duplicate_room_across_floors(self):
        config = make_config([[1, 2], [2, 3]])
        with pytest.raises(ConfigurationError, match="Room 2"):
            config.validate()

    def test_timetable_unknown_room(self):
        config = make_config([[1, 2]], timetable=[(99, 9, 10)])
        with pytest.raises(ConfigurationError, match="unknown room 99"):
            config.validate()

    def test_empty_interval(self):
        config = make_config([[1]], timetable=[(1, 10, 10)])
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_no_floors(self):
        with pytest.raises(ConfigurationError):
            SimulationConfig(floors=[]).validate()

    def test_negative_cost(self):
        config = make_config([[1]], timing=TimingConfig(room_travel_time=-1))
        with pytest.raises(ConfigurationError, match="room_travel_time"):
            config.validate()

    @pytest.mark.parametrize("name", [
        "room_travel_time", "room_cleaning_time", "elevator_travel_time",
    ])
    def test_zero_move_cost_rejected(self, name):
        config = make_config([[10]], timing=TimingConfig(**{name: 0}))
        with pytest.raises(ConfigurationError, match=name):
            config.validate()

    def test_zero_idle_time_allowed(self):
        make_config([[10]], timing=TimingConfig(idle_time=0)).validate()

    def test_negative_idle_time(self):
        config = make_config([[10]], timing=TimingConfig(idle_time=-1))
        with pytest.raises(ConfigurationError, match="idle_time"):
            config.validate()

    def test_probability_out_of_range(self):
        config = make_config([[1]])
        config.occupancy = OccupancyConfig(unexpected_probability=1.5)
        with pytest.raises(ConfigurationError, match="unexpected_probability"):
            config.validate()

    def test_bad_corridor_state(self):
        config = SimulationConfig(floors=[FloorSpec(room_ids=[1], corridor="Sticky")])
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_floors_without_elevator_allowed(self):
        make_config([[1], [2]], has_elevator=False).validate()


class TestLoadConfig:
    def test_shipped_building(self):
        config = load_config(CONFIG_DIR / "mubas.yaml")
        assert len(config.floors) == 3
        assert len(config.timetable) == 16
        assert TimetableEntry(40, 9, 11) in config.timetable
        assert config.timing.idle_time == 1
        assert config.scramble is True
        assert config.max_steps == 500

    def test_single_corridor(self):
        config = load_config(CONFIG_DIR / "single_corridor.yaml")
        assert config.has_elevator is False
        assert config.has_timetable is False
        assert config.timetable == []

    def test_minimal_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("simulation:\n  max_steps: 7\n")
        config = load_config(path)
        assert config.max_steps == 7
        assert len(config.floors) == 3
        assert len(config.timetable) == 16

    def test_custom_floors_drop_default_timetable(self, tmp_path):
        path = tmp_path / "small.yaml"
        path.write_text("building:\n  floors:\n    - [1, 2]\n    - rooms: [3]\n")
        config = load_config(path)
        assert [f.room_ids for f in config.floors] == [[1, 2], [3]]
        assert config.timetable == []

    def test_mapping_timetable_entries(self, tmp_path):
        path = tmp_path / "tt.yaml"
        path.write_text(
            "building:\n  floors:\n    - [1]\n"
            "timetable:\n  - {room: 1, start: 9, end: 12}\n"
        )
        config = load_config(path)
        assert config.timetable == [TimetableEntry(1, 9, 12)]

    def test_invalid_file_raises(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text("building:\n  floors:\n    - [1]\n    - [1]\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")
