"""Model package for the cleaning robot simulation."""

from .state import Location, TickEvent, RoomSnapshot, SimulationState
from .building import (Building, Floor, Room, Cleanliness, Availability,
                       InvariantViolation)
from .schedule import ScheduleOracle, OpenSchedule
from .agent import NavigationPolicy, Transition
from .engine import RunState, SimulationEngine, reset, step, is_complete

__all__ = [
    'Location',
    'TickEvent',
    'RoomSnapshot',
    'SimulationState',
    'Building',
    'Floor',
    'Room',
    'Cleanliness',
    'Availability',
    'InvariantViolation',
    'ScheduleOracle',
    'OpenSchedule',
    'NavigationPolicy',
    'Transition',
    'RunState',
    'SimulationEngine',
    'reset',
    'step',
    'is_complete',
]
