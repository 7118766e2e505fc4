"""Simulation stepper for the cleaning robot."""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Optional, Any

from .building import Building, InvariantViolation
from .schedule import ScheduleOracle, OpenSchedule
from .agent import NavigationPolicy, Transition
from .state import (Location, TickEvent, RoomSnapshot, SimulationState,
                    CORRIDOR, ELEVATOR)
from ..config import SimulationConfig


@dataclass
class RunState:
    """
    Everything one run owns. The stepper is its only writer.

    `time` is elapsed simulated minutes and only moves forward;
    `current_hour` is derived from it.
    """
    config: SimulationConfig
    building: Building
    oracle: Any
    policy: NavigationPolicy
    rng: Any
    location: Location = field(default_factory=lambda: Location(0, CORRIDOR))
    time: int = 0
    current_hour: int = 8
    tick: int = 0
    cleaned_count: int = 0
    moves: int = 0
    idle_ticks: int = 0
    skipped_visits: int = 0
    complete: bool = False
    hour_log: List[Tuple[int, int]] = field(default_factory=list)
    events: List[TickEvent] = field(default_factory=list)

    def hour_at(self, time: int) -> int:
        timing = self.config.timing
        return time // timing.minutes_per_hour + timing.start_hour

    def snapshot(self) -> SimulationState:
        """Create immutable snapshot of current run state."""
        rooms = [
            RoomSnapshot(
                floor=f,
                room_id=room.id,
                cleanliness=room.cleanliness.value,
                availability=room.availability.value
            )
            for f, room in self.building.iter_rooms()
        ]
        occupied = sum(1 for r in rooms if r.availability == "Occupied")
        metrics = {
            'cleaned': self.cleaned_count,
            'moves': self.moves,
            'idle_ticks': self.idle_ticks,
            'skipped_visits': self.skipped_visits,
            'dirty_remaining': self.building.dirty_count(),
            'occupied_rooms': occupied,
            'total_rooms': len(rooms),
        }
        return SimulationState(
            step=self.tick,
            time=self.time,
            current_hour=self.current_hour,
            location=self.location,
            rooms=rooms,
            corridors=[fl.corridor.value for fl in self.building.floors],
            metrics=metrics,
            events=list(self.events),
            complete=self.complete
        )


def reset(config: SimulationConfig, scramble: Optional[bool] = None,
          rng=None) -> RunState:
    """
    Build a fresh run: all rooms Dirty (or coin-flipped when scrambling),
    clock at zero, robot in the floor 0 corridor, availability seeded.
    """
    if rng is None:
        rng = np.random.default_rng(config.seed)
    if scramble is None:
        scramble = config.scramble

    building = Building.from_config(config)
    if scramble:
        building.scramble(rng)

    if config.has_timetable:
        oracle = ScheduleOracle(config.timetable, config.occupancy)
    else:
        oracle = OpenSchedule()

    run = RunState(
        config=config,
        building=building,
        oracle=oracle,
        policy=NavigationPolicy(config.timing, config.has_elevator),
        rng=rng,
        current_hour=config.timing.start_hour
    )
    run.oracle.update(run.building, run.current_hour, run.rng)
    run.complete = run.building.all_clean()
    return run


def _check_location(run: RunState) -> None:
    """The robot must stand somewhere the building actually has."""
    loc = run.location
    if not 0 <= loc.floor < run.building.floor_count:
        raise InvariantViolation(f"Robot on missing floor {loc.floor}")
    if loc.position in (CORRIDOR, ELEVATOR):
        return
    run.building.get_room(loc.floor, loc.position)


def _apply(run: RunState, transition: Transition) -> None:
    """Apply one micro-transition as a single state replacement."""
    if transition.location != run.location:
        run.moves += 1
        run.events.append(TickEvent(
            "move", run.time + transition.cost, transition.location.floor,
            transition.location.room_id, str(transition.location)))
    run.location = transition.location
    run.time += transition.cost
    _check_location(run)

    if transition.cleaned is not None:
        room = run.building.get_room(run.location.floor, transition.cleaned)
        if room.is_dirty:
            run.building.mark_clean(run.location.floor, room.id)
            run.cleaned_count += 1
            run.events.append(TickEvent("clean", run.time, run.location.floor, room.id))
    if transition.skipped is not None:
        run.skipped_visits += 1
        run.events.append(TickEvent(
            "skip", run.time, run.location.floor, transition.skipped, "occupied"))


def step(run: RunState) -> RunState:
    """
    Execute one tick.

    1. Ask the policy for this tick's micro-transitions and apply them
    2. Refresh availability when time lands on the oracle interval
    3. Track the simulated hour
    4. Detect completion (every room Clean)

    Once complete only the availability refresh still runs.
    """
    run.tick += 1
    run.events = []

    if not run.complete:
        _check_location(run)
        transitions = run.policy.plan(run.location, run.building)
        if not transitions:
            run.idle_ticks += 1
            run.time += run.config.timing.idle_time
            run.events.append(TickEvent("idle", run.time, run.location.floor))
        for transition in transitions:
            _apply(run, transition)

    if run.time % run.config.timing.availability_interval == 0:
        changed = run.oracle.update(run.building, run.hour_at(run.time), run.rng)
        run.events.append(TickEvent(
            "availability", run.time, detail=f"{changed} rooms changed"))

    hour = run.hour_at(run.time)
    if hour != run.current_hour:
        run.current_hour = hour
        run.hour_log.append((run.time, hour))
        run.events.append(TickEvent("hour", run.time, detail=f"{hour:02d}:00"))

    if not run.complete and run.building.all_clean():
        run.complete = True
        run.events.append(TickEvent("complete", run.time))

    return run


def is_complete(run: RunState) -> bool:
    return run.complete


class SimulationEngine:
    """
    Driver-side wrapper: owns one RunState and hands out snapshots.

    Mirrors the start / step / reset controls a front end needs; the
    tick cadence and any animation delay stay with the caller.
    """

    def __init__(self, config: SimulationConfig, rng=None):
        self.config = config
        self._rng = rng
        self.run = reset(config, rng=rng)

    def reset(self, scramble: Optional[bool] = None) -> SimulationState:
        self.run = reset(self.config, scramble=scramble, rng=self._rng)
        return self.run.snapshot()

    def step(self) -> SimulationState:
        step(self.run)
        return self.run.snapshot()

    def is_finished(self) -> bool:
        """Check if the driver should stop ticking."""
        return self.run.complete or self.run.tick >= self.config.max_steps

    def get_summary(self) -> Dict:
        """Get summary statistics for the run."""
        run = self.run
        return {
            'total_steps': run.tick,
            'elapsed_time': run.time,
            'final_hour': run.current_hour,
            'rooms_cleaned': run.cleaned_count,
            'rooms_total': sum(1 for _ in run.building.iter_rooms()),
            'dirty_remaining': run.building.dirty_count(),
            'moves': run.moves,
            'idle_ticks': run.idle_ticks,
            'skipped_visits': run.skipped_visits,
            'complete': run.complete
        }
