"""Timetable-driven room occupancy with random deviation."""

from typing import Dict, List, Sequence, Tuple

from .building import Availability, Building
from ..config import OccupancyConfig, TimetableEntry


class ScheduleOracle:
    """
    Recomputes every room's availability from the simulated hour.

    Per room, independently:
    1. scheduled = some timetable entry covers (room, hour)
    2. draw p; if p < deviation_probability the room deviates:
       - scheduled rooms stay Occupied unless a second draw q falls
         under cancellation_probability (class cancelled -> Available)
       - unscheduled rooms become Occupied if q < unexpected_probability
    3. otherwise the room follows the timetable exactly.

    `Unexpected` is never assigned here.
    """

    def __init__(self, timetable: Sequence[TimetableEntry],
                 occupancy: OccupancyConfig):
        self.occupancy = occupancy
        # room id -> list of (start, end) windows
        self.windows: Dict[int, List[Tuple[int, int]]] = {}
        for entry in timetable:
            self.windows.setdefault(entry.room_id, []).append(
                (entry.start_hour, entry.end_hour))

    def is_scheduled(self, room_id: int, hour: int) -> bool:
        """True if a timetable entry books the room at this hour."""
        return any(start <= hour < end
                   for start, end in self.windows.get(room_id, ()))

    def decide(self, scheduled: bool, rng) -> Availability:
        """Availability for a single room given its timetable status."""
        occ = self.occupancy
        if rng.random() < occ.deviation_probability:
            if scheduled:
                if rng.random() < occ.cancellation_probability:
                    return Availability.AVAILABLE
                return Availability.OCCUPIED
            if rng.random() < occ.unexpected_probability:
                return Availability.OCCUPIED
            return Availability.AVAILABLE

        return Availability.OCCUPIED if scheduled else Availability.AVAILABLE

    def update(self, building: Building, hour: int, rng) -> int:
        """
        Write fresh availability into every room.

        Returns the number of rooms whose availability changed.
        """
        changed = 0
        for _, room in building.iter_rooms():
            new = self.decide(self.is_scheduled(room.id, hour), rng)
            if new is not room.availability:
                changed += 1
            building.set_availability(room.id, new)
        return changed


class OpenSchedule:
    """Stand-in oracle for buildings run without a timetable."""

    def update(self, building: Building, hour: int, rng) -> int:
        changed = 0
        for _, room in building.iter_rooms():
            if room.availability is not Availability.AVAILABLE:
                changed += 1
                building.set_availability(room.id, Availability.AVAILABLE)
        return changed
