"""Building / floor / room topology for the cleaning robot simulation."""

from enum import Enum
from typing import Dict, List, Iterator, Tuple, Optional, TYPE_CHECKING

from ..config import ConfigurationError

if TYPE_CHECKING:
    from ..config import SimulationConfig


class InvariantViolation(RuntimeError):
    """Run state references something the building does not contain."""


class Cleanliness(Enum):
    CLEAN = "Clean"
    DIRTY = "Dirty"


class Availability(Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    UNEXPECTED = "Unexpected"  # declared, never assigned by the oracle


class Room:
    """A cleanable room. Only the stepper and the oracle mutate it."""

    def __init__(self, room_id: int):
        self.id = room_id
        self.cleanliness = Cleanliness.DIRTY
        self.availability = Availability.AVAILABLE

    @property
    def is_dirty(self) -> bool:
        return self.cleanliness is Cleanliness.DIRTY

    def is_target(self) -> bool:
        """Dirty and not occupied: eligible for the navigation scan."""
        return self.is_dirty and self.availability is not Availability.OCCUPIED

    def __repr__(self) -> str:
        return (f"Room(id={self.id}, {self.cleanliness.value}, "
                f"{self.availability.value})")


class Floor:
    """One storey: rooms keyed by id (insertion order kept) and a corridor."""

    def __init__(self, index: int, room_ids: List[int],
                 corridor: Cleanliness = Cleanliness.CLEAN):
        self.index = index
        self.rooms: Dict[int, Room] = {rid: Room(rid) for rid in room_ids}
        # Carried for display only; never dirtied or targeted.
        self.corridor = corridor

    def first_target(self) -> Optional[Room]:
        """First dirty, not-occupied room in insertion order."""
        for room in self.rooms.values():
            if room.is_target():
                return room
        return None

    def is_clean(self) -> bool:
        return all(not room.is_dirty for room in self.rooms.values())


class Building:
    """
    Ordered floors with globally unique room ids.

    Mutation goes through mark_clean (stepper) and set_availability
    (schedule oracle) only.
    """

    def __init__(self, floor_rooms: List[List[int]],
                 corridors: Optional[List[Cleanliness]] = None):
        self.floors: List[Floor] = []
        self._room_floor: Dict[int, int] = {}

        for index, room_ids in enumerate(floor_rooms):
            for rid in room_ids:
                if rid in self._room_floor:
                    raise ConfigurationError(
                        f"Room {rid} appears on floor {self._room_floor[rid]} "
                        f"and floor {index}")
                self._room_floor[rid] = index
            corridor = corridors[index] if corridors else Cleanliness.CLEAN
            self.floors.append(Floor(index, room_ids, corridor))

    @classmethod
    def from_config(cls, config: "SimulationConfig") -> "Building":
        """Build a fresh, all-dirty building from the static topology."""
        config.validate()
        return cls(
            [spec.room_ids for spec in config.floors],
            [Cleanliness(spec.corridor) for spec in config.floors]
        )

    @property
    def floor_count(self) -> int:
        return len(self.floors)

    def iter_rooms(self) -> Iterator[Tuple[int, Room]]:
        """Yield (floor index, room) over the whole building."""
        for floor in self.floors:
            for room in floor.rooms.values():
                yield floor.index, room

    def floor_of(self, room_id: int) -> int:
        if room_id not in self._room_floor:
            raise InvariantViolation(f"Unknown room id {room_id}")
        return self._room_floor[room_id]

    def get_room(self, floor_index: int, room_id: int) -> Room:
        """Look up a room on a specific floor, enforcing membership."""
        if not 0 <= floor_index < len(self.floors):
            raise InvariantViolation(f"Floor {floor_index} does not exist")
        room = self.floors[floor_index].rooms.get(room_id)
        if room is None:
            raise InvariantViolation(
                f"Room {room_id} is not on floor {floor_index}")
        return room

    def mark_clean(self, floor_index: int, room_id: int) -> None:
        self.get_room(floor_index, room_id).cleanliness = Cleanliness.CLEAN

    def set_availability(self, room_id: int, availability: Availability) -> None:
        floor_index = self.floor_of(room_id)
        self.floors[floor_index].rooms[room_id].availability = availability

    def scramble(self, rng) -> None:
        """Independently flip a fair coin for each room's cleanliness."""
        for _, room in self.iter_rooms():
            room.cleanliness = (Cleanliness.CLEAN if rng.random() < 0.5
                                else Cleanliness.DIRTY)

    def all_clean(self) -> bool:
        return all(floor.is_clean() for floor in self.floors)

    def dirty_count(self) -> int:
        return sum(1 for _, room in self.iter_rooms() if room.is_dirty)

    def __repr__(self) -> str:
        return (f"Building(floors={len(self.floors)}, "
                f"rooms={len(self._room_floor)})")
