"""
Arc-consistency propagation over the wave.

A variant stays possible in a cell only while at least one variant in each
neighbouring cell allows it on the facing side.
"""

from collections import deque
from typing import Iterable, Optional, Tuple

from .rule_table import CompiledRuleTable
from .transform import SIDE_OFFSETS
from .wave import Wave


def propagate(
    wave: Wave,
    table: CompiledRuleTable,
    seeds: Optional[Iterable[Tuple[int, int]]] = None
) -> bool:
    """
    Remove unsupported variants until a fixed point or a contradiction.

    Args:
        wave: Wave to reduce in place
        table: Compiled rules the wave's ids refer to
        seeds: Changed cells to start from; None checks every cell

    Returns:
        True if the wave is consistent, False as soon as a cell becomes
        empty. On False the wave is left partially reduced.
    """
    queue = deque(wave.cells() if seeds is None else seeds)

    while queue:
        x, y = queue.popleft()
        current = wave[x, y]

        for side, (dx, dy) in SIDE_OFFSETS.items():
            nx, ny = x + dx, y + dy
            if not wave.in_bounds(nx, ny):
                continue

            # Everything the cell still allows on the side facing the neighbour
            supported = set()
            for variant_id in current:
                supported |= table.allowed(variant_id, side)

            neighbor = wave[nx, ny]
            changed = False
            for variant_id in tuple(neighbor):
                if variant_id not in supported:
                    neighbor.discard(variant_id)
                    changed = True

            if not neighbor:
                return False
            if changed:
                queue.append((nx, ny))

    return True
