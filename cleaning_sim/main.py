#!/usr/bin/env python3
"""
Cleaning Robot Simulation

An autonomous cleaner working through a multi-floor teaching building
while class timetables (with random cancellations and unexpected
bookings) decide which rooms it may enter.

Usage:
    python -m cleaning_sim.main [--config configs/mubas.yaml] [options]

Examples:
    python -m cleaning_sim.main
    python -m cleaning_sim.main --config configs/mubas.yaml --gif --out-dir results/
    python -m cleaning_sim.main --no-timetable --no-csv --no-snapshot --quiet
    python -m cleaning_sim.main --scramble --seed 42
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config, default_config, ConfigurationError
from .model.building import InvariantViolation
from .model.engine import SimulationEngine
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Cleaning Robot Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m cleaning_sim.main
    python -m cleaning_sim.main --config configs/mubas.yaml --gif --out-dir results/
    python -m cleaning_sim.main --no-timetable --no-csv --no-snapshot --quiet
    python -m cleaning_sim.main --scramble --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file '
                             '(default: built-in three-floor building)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation ticks')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    parser.add_argument('--scramble', dest='scramble', action='store_true', default=None,
                        help='Randomise initial room cleanliness')
    parser.add_argument('--no-scramble', dest='scramble', action='store_false',
                        help='Start with every room dirty')
    parser.add_argument('--no-elevator', action='store_true', default=False,
                        help='Confine the robot to its starting floor')
    parser.add_argument('--no-timetable', action='store_true', default=False,
                        help='Ignore the timetable; every room stays available')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    parser.add_argument('--progress-every', type=int, default=25,
                        help='Print progress every N ticks (default: 25)')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except ConfigurationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.scramble is not None:
        config.scramble = args.scramble
    if args.no_elevator:
        config.has_elevator = False
    if args.no_timetable:
        config.has_timetable = False
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    try:
        config.validate()
    except ConfigurationError as e:
        print(f"Error: Invalid configuration: {e}", file=sys.stderr)
        return 1

    # Initialize engine
    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Floors: {len(config.floors)}")
        print(f"  Rooms: {sum(len(f.room_ids) for f in config.floors)}")
        print(f"  Timetable entries: {len(config.timetable)}"
              f"{'' if config.has_timetable else ' (ignored)'}")
        print(f"  Elevator: {'yes' if config.has_elevator else 'no'}")
        print(f"  Max ticks: {config.max_steps}")

    engine = SimulationEngine(config)

    if not config.quiet:
        print(f"  Dirty at start: {engine.run.building.dirty_count()}")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv',
                               events_path=config.out_dir / 'events.csv')
        csv_writer.open()

    visualizer = Visualizer([f.room_ids for f in config.floors])

    reporter = Reporter(str(args.config or '<built-in>'), config.seed)
    reporter.start(engine.run.snapshot())

    # Main simulation loop
    if not config.quiet:
        print("\nRunning simulation...")

    final_state = engine.run.snapshot()
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            # Export CSV
            if csv_writer:
                csv_writer.append(state)

            if config.gif_enabled:
                visualizer.buffer_frame(state)

            # Update reporter
            reporter.update(state)

            # Progress indicator
            if not config.quiet:
                for event in state.events:
                    if event.kind == "hour":
                        print(f"  Tick {state.step}: clock reached {event.detail}")
                if state.step % args.progress_every == 0:
                    print(f"  Tick {state.step}: t={state.time}, "
                          f"{int(state.metrics['cleaned'])} cleaned, "
                          f"{int(state.metrics['dirty_remaining'])} dirty, "
                          f"robot at {state.location}")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    except InvariantViolation as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return 1
    finally:
        if csv_writer:
            csv_writer.close()

    if csv_writer and not config.quiet:
        print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
