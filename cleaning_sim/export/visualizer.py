"""Visualization and export for the cleaning robot simulation."""

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from pathlib import Path
from typing import Dict, List, Tuple, TYPE_CHECKING
from PIL import Image
import io

from ..model.state import CORRIDOR, ELEVATOR

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Visualizer:
    """
    Draws the building floor by floor using matplotlib.

    Each floor is a row of tiles: elevator, corridor, then its rooms in
    building order. Floor 0 is drawn at the bottom.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'clean': '#A9DFBF',     # Light green
        'dirty': '#F5B7B1',     # Light red
        'corridor': '#ECF0F1',  # Light gray
        'elevator': '#D6DBDF',  # Gray
        'edge': '#7F8C8D',
        'robot': '#2E86C1',     # Blue
        'occupied': '#2C3E50',  # Hatch color
    }

    TILE = 1.0
    GAP = 0.2

    def __init__(self, floor_rooms: List[List[int]]):
        self.floor_rooms = floor_rooms
        self.frames: List[Image.Image] = []
        self._positions = self._layout()

    def _layout(self) -> Dict[Tuple[int, object], Tuple[float, float]]:
        """Map (floor, position) to the lower-left corner of its tile."""
        pitch = self.TILE + self.GAP
        positions = {}
        for f, rooms in enumerate(self.floor_rooms):
            y = f * (self.TILE + 2 * self.GAP)
            positions[(f, ELEVATOR)] = (0.0, y)
            positions[(f, CORRIDOR)] = (pitch, y)
            for i, room_id in enumerate(rooms):
                positions[(f, room_id)] = ((i + 2) * pitch, y)
        return positions

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        widest = max(len(rooms) for rooms in self.floor_rooms) + 2
        width = widest * (self.TILE + self.GAP)
        height = len(self.floor_rooms) * (self.TILE + 2 * self.GAP)
        fig, ax = plt.subplots(figsize=(max(6, width * 1.1), max(3, height * 1.1)))

        for f in range(len(self.floor_rooms)):
            x, y = self._positions[(f, ELEVATOR)]
            ax.add_patch(Rectangle((x, y), self.TILE, self.TILE,
                                   facecolor=self.COLORS['elevator'],
                                   edgecolor=self.COLORS['edge']))
            ax.text(x + 0.5, y + 0.15, 'Lift', ha='center', fontsize=7)

            x, y = self._positions[(f, CORRIDOR)]
            corridor = state.corridors[f] if f < len(state.corridors) else 'Clean'
            ax.add_patch(Rectangle((x, y), self.TILE, self.TILE,
                                   facecolor=(self.COLORS['corridor'] if corridor == 'Clean'
                                              else self.COLORS['dirty']),
                                   edgecolor=self.COLORS['edge']))
            ax.text(x + 0.5, y + 0.15, 'Corr.', ha='center', fontsize=7)
            ax.text(-0.3, y + 0.5, f'Floor {f + 1}', ha='right', va='center',
                    fontsize=9, fontweight='bold')

        for room in state.rooms:
            x, y = self._positions[(room.floor, room.room_id)]
            color = (self.COLORS['clean'] if room.cleanliness == 'Clean'
                     else self.COLORS['dirty'])
            hatch = '//' if room.availability == 'Occupied' else None
            ax.add_patch(Rectangle((x, y), self.TILE, self.TILE,
                                   facecolor=color, hatch=hatch,
                                   edgecolor=self.COLORS['occupied'] if hatch
                                   else self.COLORS['edge']))
            ax.text(x + 0.5, y + 0.15, str(room.room_id), ha='center', fontsize=8)

        # Robot
        loc = state.location
        rx, ry = self._positions[(loc.floor, loc.position)]
        ax.plot(rx + 0.5, ry + 0.6, 'o', color=self.COLORS['robot'],
                markersize=12, markeredgecolor='white', markeredgewidth=1.0)

        ax.set_title(f'Tick {state.step} | {state.current_hour:02d}:00 '
                     f'(t={state.time}) | Cleaned: {int(state.metrics.get("cleaned", 0))}'
                     + (' | Complete' if state.complete else ''))
        ax.set_xlim(-1.5, width)
        ax.set_ylim(-0.2, height)
        ax.set_aspect('equal')
        ax.axis('off')

        # Legend
        legend_elements = [
            Rectangle((0, 0), 1, 1, facecolor=self.COLORS['clean'], label='Clean'),
            Rectangle((0, 0), 1, 1, facecolor=self.COLORS['dirty'], label='Dirty'),
            Rectangle((0, 0), 1, 1, facecolor='white', hatch='//',
                      edgecolor=self.COLORS['occupied'], label='Occupied'),
            plt.Line2D([0], [0], marker='o', color='w', label='Robot',
                       markerfacecolor=self.COLORS['robot'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=7)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )
