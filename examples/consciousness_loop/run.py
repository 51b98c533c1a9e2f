"""
Consciousness Loop
==================

WHAT THIS SHOWS:
- Goal-directed focus: the head goal decides what the mind attends to
- Strategic failure: repeated failures raise pain until the concept is broken down
- Idle wandering: with no goals, focus drifts along memory edges until boredom
  forces the mind to seek novelty

RUN:
    python -m examples.consciousness_loop.run --cycles 12 --seed 7
    python -m examples.consciousness_loop.run --snapshot daydream
"""

import argparse
from pathlib import Path

from hizawye import Simulation, SnapshotLoader, SystemRandomSource
from hizawye.config import Config
from hizawye.logging_utils import Color, colored, log_info
from hizawye.render import DRIVE_LABELS, describe_goals, describe_memory, drive_bar, format_drives

SNAPSHOTS_DIR = Path(__file__).parent.parent / "snapshots"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Hizawye consciousness loop")
    parser.add_argument("--cycles", type=int, default=10, help="Number of cycles to run")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: HIZAWYE_SEED)")
    parser.add_argument(
        "--snapshot",
        default=None,
        help="Snapshot name under examples/snapshots (default: built-in canonical snapshot)",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final summary")
    return parser.parse_args()


def print_summary(simulation: Simulation) -> None:
    state = simulation.state
    log_info(f"\n=== After cycle {simulation.cycle} ===")
    for key, label in DRIVE_LABELS:
        value = getattr(state.drives, key)
        print(f"  {label:<10} [{drive_bar(value)}] {value:>3}")
    log_info("Goals:")
    for line in describe_goals(state) or ["  (none)"]:
        print(f"  {line}")
    log_info("Memory:")
    for line in describe_memory(state):
        print(f"  {line}")


def main(args: argparse.Namespace) -> None:
    Config.validate()

    snapshot = SnapshotLoader(SNAPSHOTS_DIR).load(args.snapshot) if args.snapshot else None
    seed = args.seed if args.seed is not None else Config.SEED
    simulation = Simulation(
        snapshot=snapshot,
        rng=SystemRandomSource(seed=seed),
        verbose=not args.quiet,
    )

    if not args.quiet:
        print(Config.display())
        print()

    for _ in range(args.cycles):
        if not args.quiet:
            print(colored(f"=== Cycle {simulation.cycle + 1}/{args.cycles} ===", Color.CYAN, bold=True))
        simulation.run_cycle()
        if not args.quiet:
            print(f"  {format_drives(simulation.state)}")

    print_summary(simulation)


if __name__ == "__main__":
    main(parse_args())
