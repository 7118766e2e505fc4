"""CSV export functionality for the cleaning robot simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState


ROOM_FIELDS = [
    "step", "time", "hour", "floor", "room", "cleanliness", "availability",
    "robot_floor", "robot_position",
]

EVENT_FIELDS = ["step", "time", "kind", "floor", "room", "detail"]


class CSVWriter:
    """
    Exports per-tick room states to CSV incrementally.

    Output format:
        step,time,hour,floor,room,cleanliness,availability,robot_floor,robot_position
        1,2,8,0,40,Dirty,Available,0,40
        ...

    With ``events_path`` set, tick events go to a second file:
        step,time,kind,floor,room,detail
        2,9,clean,0,40,
    """

    def __init__(self, output_path: Path, events_path: Optional[Path] = None):
        self.output_path = Path(output_path)
        self.events_path = Path(events_path) if events_path else None
        self._files = []
        self.writer: Optional[csv.DictWriter] = None
        self.event_writer: Optional[csv.DictWriter] = None
        self.rows_written = 0

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    def _open_csv(self, path: Path, fields) -> csv.DictWriter:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, 'w', newline='')
        self._files.append(handle)
        writer = csv.DictWriter(handle, fieldnames=fields)
        writer.writeheader()
        return writer

    def open(self) -> None:
        """Create output files and write headers."""
        self.writer = self._open_csv(self.output_path, ROOM_FIELDS)
        if self.events_path:
            self.event_writer = self._open_csv(self.events_path, EVENT_FIELDS)

    def append(self, state: "SimulationState") -> None:
        """Write one row per room (and one per event) for the tick."""
        if not self.is_open:
            self.open()
        for row in state.to_csv_rows():
            self.writer.writerow(row)
            self.rows_written += 1
        if self.event_writer:
            for event in state.events:
                self.event_writer.writerow({
                    "step": state.step,
                    "time": event.time,
                    "kind": event.kind,
                    "floor": "" if event.floor is None else event.floor,
                    "room": "" if event.room_id is None else event.room_id,
                    "detail": event.detail,
                })
        for handle in self._files:
            handle.flush()

    def close(self) -> None:
        """Close file handles."""
        for handle in self._files:
            handle.close()
        self._files = []
        self.writer = None
        self.event_writer = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
