"""Summary report generation for the cleaning robot simulation."""

from typing import List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Accumulates per-tick metrics and formats the end-of-run report."""

    def __init__(self, config_path: str, seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.peak_occupied = 0
        self.availability_refreshes = 0
        self.hours_seen: List[int] = []
        self.completed_at: Optional[int] = None
        self.last_room_cleaned: Optional[int] = None

    def start(self, state: "SimulationState") -> None:
        """Record the state the run starts from, before any tick."""
        self.hours_seen = [state.current_hour]
        if state.complete:
            self.completed_at = state.step

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per tick."""
        if not self.hours_seen:
            self.hours_seen.append(state.current_hour)

        occupied = int(state.metrics.get('occupied_rooms', 0))
        if occupied > self.peak_occupied:
            self.peak_occupied = occupied

        for event in state.events:
            if event.kind == "availability":
                self.availability_refreshes += 1
            elif event.kind == "hour":
                self.hours_seen.append(state.current_hour)
            elif event.kind == "clean":
                self.last_room_cleaned = event.room_id
            elif event.kind == "complete":
                self.completed_at = state.step

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        total_rooms = int(metrics.get('total_rooms', 0))
        dirty = int(metrics.get('dirty_remaining', 0))
        clean_pct = ((total_rooms - dirty) / total_rooms * 100) if total_rooms > 0 else 0

        if self.completed_at is not None:
            status = f"All rooms clean after {self.completed_at} ticks"
        else:
            status = f"Stopped with {dirty} dirty room(s) left"

        first_hour = self.hours_seen[0] if self.hours_seen else final_state.current_hour

        lines = [
            "",
            "=" * 80,
            "                    CLEANING ROBOT SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "RUN METRICS",
            "-" * 40,
            f"Ticks:                 {final_state.step}",
            f"Simulated Time:        {final_state.time} minutes",
            f"Clock:                 {first_hour:02d}:00 -> {final_state.current_hour:02d}:00",
            f"Rooms Cleaned:         {int(metrics.get('cleaned', 0))}",
            f"Rooms Clean Now:       {total_rooms - dirty} / {total_rooms} ({clean_pct:.1f}%)",
            f"Moves:                 {int(metrics.get('moves', 0))}",
            f"Idle Ticks:            {int(metrics.get('idle_ticks', 0))}",
            f"Visits Skipped:        {int(metrics.get('skipped_visits', 0))}",
            f"Peak Occupied Rooms:   {self.peak_occupied}",
            f"Availability Updates:  {self.availability_refreshes}",
            f"Last Room Cleaned:     {self.last_room_cleaned if self.last_room_cleaned is not None else '-'}",
            f"Final Robot Location:  {final_state.location}",
            "",
            "STATUS",
            "-" * 40,
            f"[{'X' if self.completed_at is not None else ' '}] {status}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
            lines.append(f"Event Log:  {output_dir / 'events.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
