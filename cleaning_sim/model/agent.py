"""Greedy navigation policy for the cleaning robot."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .building import Availability, Building
from .state import Location, CORRIDOR, ELEVATOR
from ..config import TimingConfig


@dataclass(frozen=True)
class Transition:
    """One micro-step: the robot's next location and the time it costs."""
    location: Location
    cost: int
    cleaned: Optional[int] = None   # room id cleaned during this step
    skipped: Optional[int] = None   # room id left dirty (occupied on arrival)


class NavigationPolicy:
    """
    Picks the robot's next move from its location and the building.

    Target selection is the wraparound scan: floors are visited from the
    robot's floor upwards, then from floor 0, and within a floor rooms are
    taken in insertion order. The first dirty, not-occupied room wins.

    Position state machine:
    - Corridor: enter the target room if it is on this floor, otherwise
      walk to the elevator if the target is on another floor.
    - Room: re-check availability, clean if still Available, then return
      to the corridor either way.
    - Elevator: ride to the target floor and step out into its corridor.

    No target means no transitions (the robot idles). plan() never
    mutates the building.
    """

    def __init__(self, timing: TimingConfig, has_elevator: bool = True):
        self.timing = timing
        self.has_elevator = has_elevator

    def scan_order(self, current_floor: int, floor_count: int) -> List[int]:
        """Floor indices in wraparound order starting at current_floor."""
        if not self.has_elevator:
            return [current_floor]
        return ([f for f in range(current_floor, floor_count)] +
                [f for f in range(0, current_floor)])

    def find_target(self, current_floor: int,
                    building: Building) -> Optional[Tuple[int, int]]:
        """Return (floor index, room id) of the next room to clean, or None."""
        for f in self.scan_order(current_floor, building.floor_count):
            room = building.floors[f].first_target()
            if room is not None:
                return f, room.id
        return None

    def plan(self, location: Location, building: Building) -> List[Transition]:
        """Micro-transitions for one tick, in the order they are applied."""
        t = self.timing
        floor = location.floor

        if location.in_corridor:
            target = self.find_target(floor, building)
            if target is None:
                return []
            target_floor, room_id = target
            if target_floor == floor:
                return [Transition(Location(floor, room_id), t.room_travel_time)]
            return [Transition(Location(floor, ELEVATOR), t.room_travel_time)]

        if location.in_elevator:
            target = self.find_target(floor, building)
            if target is None:
                return []
            target_floor, _ = target
            return [
                Transition(Location(target_floor, ELEVATOR), t.elevator_travel_time),
                Transition(Location(target_floor, CORRIDOR), t.room_travel_time),
            ]

        # Inside a room; raises InvariantViolation if it is not on this floor
        room = building.get_room(floor, location.position)
        corridor = Location(floor, CORRIDOR)
        if room.availability is Availability.AVAILABLE:
            if room.is_dirty:
                return [
                    Transition(location, t.room_cleaning_time, cleaned=room.id),
                    Transition(corridor, t.room_travel_time),
                ]
            return [Transition(corridor, t.room_travel_time)]
        return [Transition(corridor, t.room_travel_time, skipped=room.id)]
