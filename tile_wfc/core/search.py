"""
Search controller: cell selection, weighted collapse and backtracking.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from .propagation import propagate
from .rule_table import CompiledRuleTable
from .wave import Snapshot, Wave

logger = logging.getLogger(__name__)


class SolverStatus(Enum):
    """Search states."""
    SEARCHING = auto()
    SOLVED = auto()
    NO_SOLUTION = auto()

    @property
    def is_terminal(self) -> bool:
        return self is not SolverStatus.SEARCHING


@dataclass(frozen=True)
class BacktrackFrame:
    """Wave as it was just before (x, y) was collapsed to variant_id."""
    snapshot: Snapshot
    x: int
    y: int
    variant_id: int


class SearchController:
    """
    Drives a wave to a full collapse one step at a time.

    Each step either collapses the least constrained undecided cell to a
    weighted random variant and propagates, or undoes the most recent
    collapse after a contradiction. A popped choice is removed from its cell,
    so it is never tried again from the same state.
    """

    def __init__(self, wave: Wave, table: CompiledRuleTable, rng: Optional[random.Random] = None):
        self.wave = wave
        self.table = table
        self.rng = rng if rng is not None else random.Random()
        self.stack: List[BacktrackFrame] = []
        self.status = SolverStatus.SEARCHING

        self.attempts = 0
        self.collapses = 0
        self.backtracks = 0

        # Set when a backtrack left the wave inconsistent; the next step pops again
        self._pending_contradiction = False

    def start(self) -> SolverStatus:
        """Propagate the initial wave over every cell."""
        if self.wave.has_contradiction() or not propagate(self.wave, self.table):
            logger.info("Initial conditions are contradictory")
            self.status = SolverStatus.NO_SOLUTION
        return self.status

    def step(self) -> SolverStatus:
        """Perform one search iteration and return the resulting status."""
        if self.status.is_terminal:
            return self.status

        self.attempts += 1

        if self._pending_contradiction:
            self._backtrack()
            return self.status

        cell = self.select_cell()
        if cell is None:
            if self.wave.has_contradiction():
                self._backtrack()
            else:
                logger.info("Solved after %d steps (%d backtracks)", self.attempts, self.backtracks)
                self.status = SolverStatus.SOLVED
            return self.status

        x, y = cell
        variant_id = self.choose_variant(x, y)

        self.stack.append(BacktrackFrame(self.wave.snapshot(), x, y, variant_id))
        self.wave.collapse(x, y, variant_id)
        self.collapses += 1

        if not propagate(self.wave, self.table, [(x, y)]):
            logger.debug(
                "Contradiction after placing '%s' at (%d, %d)",
                self.table.variant(variant_id), x, y
            )
            self._backtrack()

        return self.status

    def select_cell(self) -> Optional[Tuple[int, int]]:
        """
        Find the undecided cell with the fewest possibilities.
        Ties go to the first cell in row-major order; None if every cell
        has at most one possibility.
        """
        best = None
        best_size = None
        for x, y in self.wave.cells():
            size = len(self.wave[x, y])
            if size > 1 and (best_size is None or size < best_size):
                best = (x, y)
                best_size = size
                if size == 2:
                    break
        return best

    def choose_variant(self, x: int, y: int) -> int:
        """Draw a variant for a cell, each one repeated by its weight."""
        weighted = []
        for variant_id in sorted(self.wave[x, y]):
            weighted.extend([variant_id] * self.table.weight(variant_id))
        return self.rng.choice(weighted)

    def _backtrack(self) -> None:
        """Undo the most recent collapse and rule out the choice it made."""
        if not self.stack:
            logger.info("Backtracking exhausted after %d steps, no solution", self.attempts)
            self.status = SolverStatus.NO_SOLUTION
            self._pending_contradiction = False
            return

        self.backtracks += 1
        frame = self.stack.pop()
        logger.debug(
            "Backtracking: ruling out '%s' at (%d, %d), depth %d",
            self.table.variant(frame.variant_id), frame.x, frame.y, len(self.stack)
        )
        self.wave = Wave.from_snapshot(frame.snapshot)
        self.wave.remove(frame.x, frame.y, frame.variant_id)

        if not self.wave[frame.x, frame.y]:
            self._pending_contradiction = True
        else:
            self._pending_contradiction = not propagate(self.wave, self.table, [(frame.x, frame.y)])
