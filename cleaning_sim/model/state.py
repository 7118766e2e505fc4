"""State snapshot dataclasses for the cleaning robot simulation."""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union

CORRIDOR = "Corridor"
ELEVATOR = "Elevator"


@dataclass(frozen=True)
class Location:
    """Where the robot is: a floor index plus Corridor, Elevator or a room id."""
    floor: int
    position: Union[str, int] = CORRIDOR

    @property
    def in_corridor(self) -> bool:
        return self.position == CORRIDOR

    @property
    def in_elevator(self) -> bool:
        return self.position == ELEVATOR

    @property
    def room_id(self) -> Optional[int]:
        if isinstance(self.position, int):
            return self.position
        return None

    def __str__(self) -> str:
        return f"floor {self.floor} / {self.position}"


@dataclass(frozen=True)
class TickEvent:
    """Something that happened during one tick, for drivers and reports."""
    kind: str  # "move", "clean", "skip", "idle", "availability", "hour", "complete"
    time: int
    floor: Optional[int] = None
    room_id: Optional[int] = None
    detail: str = ""


@dataclass(frozen=True)
class RoomSnapshot:
    """Immutable snapshot of one room at a given tick."""
    floor: int
    room_id: int
    cleanliness: str  # "Clean", "Dirty"
    availability: str  # "Available", "Occupied", "Unexpected"


@dataclass
class SimulationState:
    """Complete snapshot of simulation state after a given tick."""
    step: int
    time: int
    current_hour: int
    location: Location
    rooms: List[RoomSnapshot]
    corridors: List[str]
    metrics: Dict[str, float]  # cleaned, moves, dirty_remaining, etc.
    events: List[TickEvent] = field(default_factory=list)
    complete: bool = False

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "step": self.step,
                "time": self.time,
                "hour": self.current_hour,
                "floor": r.floor,
                "room": r.room_id,
                "cleanliness": r.cleanliness,
                "availability": r.availability,
                "robot_floor": self.location.floor,
                "robot_position": self.location.position
            }
            for r in self.rooms
        ]
