#!/usr/bin/env python3
"""
Tile WFC - solve a tile grid from a rule specification file.
"""

import argparse
import json
import logging
import random
import sys
from pathlib import Path

from tile_wfc import InvalidConstraint, InvalidRule, SolverSettings, SolverStatus, WFCSolver, load_rules
from tile_wfc.logging_config import setup_logging

logger = logging.getLogger("tile_wfc.main")


def parse_fixed_cell(text: str) -> tuple:
    """Parse an "X,Y,family angle" cell constraint."""
    parts = text.split(',', 2)
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"expected X,Y,\"family angle\", got '{text}'")
    try:
        return int(parts[0]), int(parts[1]), parts[2].strip()
    except ValueError:
        raise argparse.ArgumentTypeError(f"cell coordinates must be integers in '{text}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Wave Function Collapse solver for rotation-aware tile rules"
    )
    parser.add_argument("rules", type=Path, help="Rule specification JSON file")
    parser.add_argument("--config", type=Path, help="JSON file with solver settings")
    parser.add_argument("--width", type=int, help="Grid width (default: 15)")
    parser.add_argument("--height", type=int, help="Grid height (default: 15)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument(
        "--fix",
        type=parse_fixed_cell,
        action="append",
        default=[],
        metavar="X,Y,TILE",
        help="Fix a cell before solving, e.g. --fix '0,0,bowl-corner-inner 0' (repeatable)",
    )
    parser.add_argument("--max-steps", type=int, help="Give up after N steps")
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Step on a timer and log progress after every step",
    )
    parser.add_argument("--delay", type=int, help="Milliseconds between animated steps")
    parser.add_argument("--png", type=Path, help="Also write a PNG preview of the grid")
    parser.add_argument("--tile-size", type=int, default=32, help="PNG tile size in pixels")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def load_settings(args: argparse.Namespace) -> SolverSettings:
    """Settings file first, then command line overrides."""
    settings = SolverSettings()
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as f:
            settings = SolverSettings.from_dict(json.load(f))
    if args.width is not None:
        settings.width = args.width
    if args.height is not None:
        settings.height = args.height
    if args.seed is not None:
        settings.seed = args.seed
    if args.delay is not None:
        settings.step_delay_ms = args.delay
    if args.max_steps is not None:
        settings.max_steps = args.max_steps
    return settings


def run_animated(solver: WFCSolver, settings: SolverSettings) -> None:
    """Drive the solver from a Qt timer until it finishes."""
    from PySide6.QtCore import QCoreApplication
    from tile_wfc.core.runner import SolverRunner

    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    runner = SolverRunner(solver, settings.step_delay_ms)

    def on_step(result):
        logger.info(
            "step %d | depth %d | %s",
            result.attempts, result.depth, result.status.name
        )
        if settings.max_steps is not None and result.attempts >= settings.max_steps:
            runner.pause()
            app.quit()

    runner.step_completed.connect(on_step)
    runner.finished.connect(lambda _: app.quit())
    if not solver.is_done():
        runner.start()
        app.exec()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    console_level = logging.DEBUG if args.debug else logging.INFO if args.animate else logging.WARNING
    setup_logging(console_level)

    try:
        settings = load_settings(args)
        table = load_rules(args.rules)
        solver = WFCSolver(
            settings.width,
            settings.height,
            table,
            initial_conditions=args.fix,
            rng=random.Random(settings.seed),
        )
    except (FileNotFoundError, InvalidRule, InvalidConstraint, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.animate:
        run_animated(solver, settings)
    else:
        solver.run_to_completion(settings.max_steps)

    for row in solver.get_output_labels():
        print(" | ".join(label if label is not None else "?" for label in row))

    if args.png:
        from tile_wfc.utils import export_grid_to_png
        export_grid_to_png(args.png, solver.get_output(), args.tile_size)

    status = solver.status
    print(f"{status.name.lower()} after {solver.attempts} steps, {solver.backtracks} backtracks")
    return 0 if status is SolverStatus.SOLVED else 1


if __name__ == "__main__":
    sys.exit(main())
