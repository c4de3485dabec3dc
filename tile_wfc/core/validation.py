"""
Validation utilities for rule tables and finished grids.
"""

from typing import List, Optional, Sequence

from ..models import TileVariant
from .rule_table import CompiledRuleTable
from .transform import SIDE_OFFSETS, SIDES, get_opposite_side


def validate_rule_table(table: CompiledRuleTable) -> List[str]:
    """
    Check that every adjacency is declared from both sides and that the
    weights are integers with a minimum of exactly 1.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    for rule in table.rules:
        for side in SIDES:
            opposite = get_opposite_side(side)
            for neighbor in rule.neighbors(side):
                if neighbor not in table:
                    errors.append(f"'{rule.variant}' allows unknown '{neighbor}' on {side}")
                elif rule.variant not in table.rule(neighbor).neighbors(opposite):
                    errors.append(
                        f"'{rule.variant}' allows '{neighbor}' on {side} "
                        f"but '{neighbor}' does not allow it on {opposite}"
                    )

    weights = table.weights
    if weights and min(weights) != 1:
        errors.append(f"Minimum weight is {min(weights)}, expected 1")

    return errors


def validate_grid(
    table: CompiledRuleTable,
    grid: Sequence[Sequence[Optional[TileVariant]]]
) -> List[str]:
    """
    Validate all adjacencies in a grid of variants.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    height = len(grid)

    for y, row in enumerate(grid):
        for x, tile in enumerate(row):
            if tile is None:
                errors.append(f"({x},{y}) is unresolved")
                continue

            # Only look right and down so each pair is reported once
            for side in ('right', 'down'):
                dx, dy = SIDE_OFFSETS[side]
                nx, ny = x + dx, y + dy
                if ny >= height or nx >= len(grid[ny]):
                    continue
                neighbor = grid[ny][nx]
                if neighbor is None:
                    continue

                if not table.can_be_neighbor(tile, side, neighbor):
                    errors.append(f"({x},{y}) '{tile}' does not allow '{neighbor}' on {side}")
                if not table.can_be_neighbor(neighbor, get_opposite_side(side), tile):
                    errors.append(
                        f"({nx},{ny}) '{neighbor}' does not allow '{tile}' on "
                        f"{get_opposite_side(side)}"
                    )

    return errors
