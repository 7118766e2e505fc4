"""Configuration dataclasses and YAML loader for the cleaning robot simulation."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path
import yaml


class ConfigurationError(ValueError):
    """Static configuration cannot produce a valid building."""


@dataclass
class TimingConfig:
    room_travel_time: int = 2
    room_cleaning_time: int = 5
    elevator_travel_time: int = 5
    idle_time: int = 0               # clock advance on a tick with no action
    start_hour: int = 8
    availability_interval: int = 5  # oracle cadence in simulated minutes
    minutes_per_hour: int = 60


@dataclass
class OccupancyConfig:
    deviation_probability: float = 0.30     # p < this: leave the timetable
    cancellation_probability: float = 0.20  # scheduled class cancelled
    unexpected_probability: float = 0.40    # unscheduled room taken


@dataclass
class FloorSpec:
    room_ids: List[int]
    corridor: str = "Clean"


@dataclass(frozen=True)
class TimetableEntry:
    room_id: int
    start_hour: int
    end_hour: int


@dataclass
class SimulationConfig:
    floors: List[FloorSpec]
    timetable: List[TimetableEntry] = field(default_factory=list)
    timing: TimingConfig = field(default_factory=TimingConfig)
    occupancy: OccupancyConfig = field(default_factory=OccupancyConfig)
    has_elevator: bool = True
    has_timetable: bool = True
    scramble: bool = False
    max_steps: int = 1000

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    def validate(self) -> None:
        """Raise ConfigurationError if the building cannot be constructed."""
        if not self.floors:
            raise ConfigurationError("Building needs at least one floor")

        seen: Dict[int, int] = {}
        for index, floor in enumerate(self.floors):
            for room_id in floor.room_ids:
                if room_id in seen:
                    raise ConfigurationError(
                        f"Room {room_id} appears on floor {seen[room_id]} "
                        f"and floor {index}")
                seen[room_id] = index
            if floor.corridor not in ("Clean", "Dirty"):
                raise ConfigurationError(
                    f"Unknown corridor state on floor {index}: {floor.corridor}")

        for entry in self.timetable:
            if entry.room_id not in seen:
                raise ConfigurationError(
                    f"Timetable references unknown room {entry.room_id}")
            if entry.start_hour >= entry.end_hour:
                raise ConfigurationError(
                    f"Timetable entry for room {entry.room_id} has "
                    f"start {entry.start_hour} >= end {entry.end_hour}")

        timing = self.timing
        costs = {
            'room_travel_time': timing.room_travel_time,
            'room_cleaning_time': timing.room_cleaning_time,
            'elevator_travel_time': timing.elevator_travel_time,
        }
        # Every move must advance the clock
        for name, value in costs.items():
            if value <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {value}")
        if timing.idle_time < 0:
            raise ConfigurationError(f"idle_time must be >= 0, got {timing.idle_time}")
        if timing.availability_interval <= 0:
            raise ConfigurationError("availability_interval must be positive")
        if timing.minutes_per_hour <= 0:
            raise ConfigurationError("minutes_per_hour must be positive")
        if not 0 <= timing.start_hour <= 23:
            raise ConfigurationError(f"start_hour out of range: {timing.start_hour}")

        for name in ('deviation_probability', 'cancellation_probability',
                     'unexpected_probability'):
            p = getattr(self.occupancy, name)
            if not 0.0 <= p <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {p}")


# Three-floor teaching building with the weekday class timetable.
DEFAULT_FLOORS = [
    [40, 41, 42, 43, 44, 45],
    [46, 47, 48, 49, 50],
    [51, 52, 53, 54, 55],
]

DEFAULT_TIMETABLE = [
    (40, 9, 11), (41, 10, 12), (42, 11, 13), (43, 14, 16),
    (44, 15, 17), (45, 16, 18), (46, 9, 11), (47, 11, 13),
    (48, 14, 16), (49, 16, 18), (50, 10, 12), (51, 9, 11),
    (52, 11, 13), (53, 14, 16), (54, 16, 18), (55, 10, 12),
]


def default_config() -> SimulationConfig:
    """Return the built-in building and timetable."""
    return SimulationConfig(
        floors=[FloorSpec(room_ids=list(rooms)) for rooms in DEFAULT_FLOORS],
        timetable=[TimetableEntry(*entry) for entry in DEFAULT_TIMETABLE],
    )


def _parse_floors(floors_raw: List[Any]) -> List[FloorSpec]:
    """Parse floor specifications from raw YAML data."""
    floors = []
    for f in floors_raw:
        # Accept either a bare list of room ids or a mapping
        if isinstance(f, dict):
            floors.append(FloorSpec(
                room_ids=[int(r) for r in f['rooms']],
                corridor=f.get('corridor', 'Clean')
            ))
        else:
            floors.append(FloorSpec(room_ids=[int(r) for r in f]))
    return floors


def _parse_timetable(entries_raw: List[Any]) -> List[TimetableEntry]:
    """Parse timetable entries from raw YAML data."""
    entries = []
    for e in entries_raw:
        if isinstance(e, dict):
            entries.append(TimetableEntry(
                room_id=int(e['room']),
                start_hour=int(e['start']),
                end_hour=int(e['end'])
            ))
        else:
            room_id, start, end = e
            entries.append(TimetableEntry(int(room_id), int(start), int(end)))
    return entries


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    defaults = default_config()

    building_raw = raw.get('building', {})
    if 'floors' in building_raw:
        floors = _parse_floors(building_raw['floors'])
    else:
        floors = defaults.floors

    if 'timetable' in raw:
        timetable = _parse_timetable(raw['timetable'] or [])
    elif 'floors' in building_raw:
        # Default timetable only matches the default rooms
        timetable = []
    else:
        timetable = defaults.timetable

    timing_raw = raw.get('timing', {})
    timing = TimingConfig(
        room_travel_time=timing_raw.get('room_travel_time', 2),
        room_cleaning_time=timing_raw.get('room_cleaning_time', 5),
        elevator_travel_time=timing_raw.get('elevator_travel_time', 5),
        idle_time=timing_raw.get('idle_time', 0),
        start_hour=timing_raw.get('start_hour', 8),
        availability_interval=timing_raw.get('availability_interval', 5),
        minutes_per_hour=timing_raw.get('minutes_per_hour', 60)
    )

    occ_raw = raw.get('occupancy', {})
    occupancy = OccupancyConfig(
        deviation_probability=occ_raw.get('deviation_probability', 0.30),
        cancellation_probability=occ_raw.get('cancellation_probability', 0.20),
        unexpected_probability=occ_raw.get('unexpected_probability', 0.40)
    )

    sim_raw = raw.get('simulation', {})

    # Parse export config (optional)
    export_raw = raw.get('export', {})

    config = SimulationConfig(
        floors=floors,
        timetable=timetable,
        timing=timing,
        occupancy=occupancy,
        has_elevator=building_raw.get('has_elevator', True),
        has_timetable=sim_raw.get('has_timetable', True),
        scramble=sim_raw.get('scramble', False),
        max_steps=sim_raw.get('max_steps', 1000),
        seed=sim_raw.get('seed'),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False)
    )
    config.validate()
    return config
