#!/usr/bin/env python3
"""Command line runner for the roulette wheel.

Usage examples:
  python python/roulette.py window
  python python/roulette.py layout
  python python/roulette.py simulate --count 10000 --seed 7
  python python/roulette.py snapshot --number 17
  python python/roulette.py record --out output/spin.gif
"""

from __future__ import annotations

import argparse
import logging
import math
import random
from collections import Counter
from pathlib import Path
from typing import Callable, List, Optional

from frame_scheduler import FixedStepScheduler
from settings import DEFAULT_CONFIG_PATH, RouletteConfig, load_settings
from spin_engine import SpinEngine, SpinOutcome
from wheel_geometry import SEGMENT_COUNT, segment_center_angle
from wheel_image import WheelImageRenderer
from wheel_layout import SegmentColor, generate_layout, segment_for_number


def fixed_source(index: int) -> Callable[[], float]:
    """Random source that always lands on ``index``."""
    value = (index + 0.5) / SEGMENT_COUNT
    return lambda: value


def simulate_spins(config: RouletteConfig, count: int, rng: random.Random) -> List[SpinOutcome]:
    # One frame per spin duration: the first tick starts the clock, the second lands.
    scheduler = FixedStepScheduler(frame_ms=config.spin.duration_ms)
    engine = SpinEngine(scheduler, config.spin, random_source=rng.random)
    outcomes: List[SpinOutcome] = []
    engine.on_outcome(outcomes.append)
    for _ in range(count):
        engine.spin()
        scheduler.run_until_idle()
    return outcomes


def chi_square(counts: Counter, total: int) -> float:
    expected = total / SEGMENT_COUNT
    return sum((counts.get(index, 0) - expected) ** 2 / expected for index in range(SEGMENT_COUNT))


def print_layout() -> None:
    for index, segment in enumerate(generate_layout()):
        center = math.degrees(segment_center_angle(index))
        print(f"{index:>2} | {segment.number:>2} | {segment.color.value:<5} | {center:7.3f}°")


def print_simulation(outcomes: List[SpinOutcome]) -> None:
    total = len(outcomes)
    if not total:
        print("No spins simulated.")
        return
    by_index = Counter(outcome.index for outcome in outcomes)
    by_color = Counter(outcome.color for outcome in outcomes)
    print(f"Spins: {total}")
    for index, segment in enumerate(generate_layout()):
        hits = by_index.get(index, 0)
        print(f"- {segment.number:>2} {segment.color.value:<5} {hits:>6} ({hits / total:6.2%})")
    for color in SegmentColor:
        hits = by_color.get(color, 0)
        print(f"{color.value:<5}: {hits} ({hits / total:.2%})")
    print(f"chi-square (36 dof): {chi_square(by_index, total):.2f}")


def resolve_number(number: Optional[int], rng: random.Random) -> int:
    if number is None:
        return rng.randrange(SEGMENT_COUNT)
    try:
        index, _ = segment_for_number(number)
    except ValueError as exc:
        raise SystemExit(str(exc)) from None
    return index


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roulette wheel spin runner.")
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help=f"Path to config.json (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible spins")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log spin details")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("window", help="Open the roulette window")
    subparsers.add_parser("layout", help="Print the wheel layout")

    simulate_parser = subparsers.add_parser("simulate", help="Run spins offline and show the distribution")
    simulate_parser.add_argument("--count", type=int, default=1000, help="Number of spins (default: 1000)")

    snapshot_parser = subparsers.add_parser("snapshot", help="Save a PNG of the ball resting on a number")
    snapshot_parser.add_argument("--number", type=int, help="Winning number (default: random)")
    snapshot_parser.add_argument("--out", help="Output PNG path")

    record_parser = subparsers.add_parser("record", help="Save an animated GIF of one spin")
    record_parser.add_argument("--number", type=int, help="Winning number (default: random)")
    record_parser.add_argument("--fps", type=int, default=30, help="Frames per second (default: 30)")
    record_parser.add_argument("--out", help="Output GIF path")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    try:
        config = load_settings(Path(args.config))
    except ValueError as exc:
        raise SystemExit(f"Invalid config: {exc}") from None
    rng = random.Random(args.seed)

    if args.command == "window":
        from app import open_window

        open_window(config)
        return

    if args.command == "layout":
        print_layout()
        return

    if args.command == "simulate":
        if args.count <= 0:
            raise SystemExit("--count must be positive")
        print_simulation(simulate_spins(config, args.count, rng))
        return

    renderer = WheelImageRenderer(config.window)
    index = resolve_number(args.number, rng)
    segment = generate_layout()[index]

    if args.command == "snapshot":
        out = Path(args.out) if args.out else config.output_dir / f"snapshot_{segment.number}.png"
        renderer.save_snapshot(out, index, config.spin)
        print(f"Saved {segment.number} ({segment.color.value}) to {out}")
        return

    if args.command == "record":
        if args.fps <= 0:
            raise SystemExit("--fps must be positive")
        out = Path(args.out) if args.out else config.output_dir / f"spin_{segment.number}.gif"
        scheduler = FixedStepScheduler(frame_ms=1000.0 / args.fps)
        engine = SpinEngine(scheduler, config.spin, random_source=fixed_source(index))
        outcome = renderer.record_gif(out, engine, scheduler, frame_stride=1)
        if outcome is None:
            raise SystemExit("Spin did not start.")
        print(f"Recorded spin landing on {outcome.number} ({outcome.color.value}) to {out}")


if __name__ == "__main__":
    main()
