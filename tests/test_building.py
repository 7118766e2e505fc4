"""Tests for the building / floor / room world model."""

import pytest

from cleaning_sim.config import ConfigurationError
from cleaning_sim.model.building import (Building, Cleanliness, Availability,
                                         InvariantViolation)

from conftest import ScriptedRng, make_config


class TestBuildingConstruction:
    def test_rooms_start_dirty_and_available(self):
        building = Building([[1, 2], [3]])
        for _, room in building.iter_rooms():
            assert room.cleanliness is Cleanliness.DIRTY
            assert room.availability is Availability.AVAILABLE

    def test_room_ids_unique_across_floors(self):
        with pytest.raises(ConfigurationError):
            Building([[1, 2], [3, 1]])

    def test_every_room_on_exactly_one_floor(self):
        building = Building.from_config(make_config([[40, 41], [42], [43, 44]]))
        seen = [room.id for _, room in building.iter_rooms()]
        assert len(seen) == len(set(seen)) == 5
        assert building.floor_of(42) == 1
        assert building.floor_of(44) == 2

    def test_insertion_order_kept(self):
        building = Building([[5, 3, 9]])
        assert list(building.floors[0].rooms) == [5, 3, 9]

    def test_corridor_starts_clean(self):
        building = Building([[1], [2]])
        assert all(f.corridor is Cleanliness.CLEAN for f in building.floors)


class TestMutation:
    def test_mark_clean(self):
        building = Building([[1, 2]])
        building.mark_clean(0, 2)
        assert building.floors[0].rooms[2].cleanliness is Cleanliness.CLEAN
        assert building.dirty_count() == 1

    def test_mark_clean_wrong_floor(self):
        building = Building([[1], [2]])
        with pytest.raises(InvariantViolation):
            building.mark_clean(0, 2)

    def test_set_availability(self):
        building = Building([[1], [2]])
        building.set_availability(2, Availability.OCCUPIED)
        assert building.floors[1].rooms[2].availability is Availability.OCCUPIED

    def test_unknown_room(self):
        building = Building([[1]])
        with pytest.raises(InvariantViolation):
            building.set_availability(7, Availability.OCCUPIED)
        with pytest.raises(InvariantViolation):
            building.get_room(3, 1)

    def test_all_clean(self):
        building = Building([[1], [2]])
        assert not building.all_clean()
        building.mark_clean(0, 1)
        building.mark_clean(1, 2)
        assert building.all_clean()


class TestScramble:
    def test_fair_coin_per_room(self):
        building = Building([[1, 2, 3]])
        building.scramble(ScriptedRng([0.1, 0.7, 0.49]))
        rooms = building.floors[0].rooms
        assert rooms[1].cleanliness is Cleanliness.CLEAN
        assert rooms[2].cleanliness is Cleanliness.DIRTY
        assert rooms[3].cleanliness is Cleanliness.CLEAN

    def test_scramble_leaves_availability(self):
        building = Building([[1, 2]])
        building.set_availability(1, Availability.OCCUPIED)
        building.scramble(ScriptedRng())
        assert building.floors[0].rooms[1].availability is Availability.OCCUPIED


class TestTargets:
    def test_first_target_skips_occupied_and_clean(self):
        building = Building([[1, 2, 3]])
        building.mark_clean(0, 1)
        building.set_availability(2, Availability.OCCUPIED)
        assert building.floors[0].first_target().id == 3

    def test_unexpected_room_still_a_target(self):
        building = Building([[1]])
        building.set_availability(1, Availability.UNEXPECTED)
        assert building.floors[0].first_target().id == 1

    def test_no_target(self):
        building = Building([[1]])
        building.set_availability(1, Availability.OCCUPIED)
        assert building.floors[0].first_target() is None
