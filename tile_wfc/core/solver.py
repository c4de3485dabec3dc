"""
Solver facade over the wave, propagation and search.

Typical use::

    table = compile_rules(spec)
    solver = WFCSolver(15, 15, table, rng=random.Random(7))
    while not solver.is_done():
        result = solver.step()        # draw result.grid each tick
    grid = solver.get_output_labels()
"""

import logging
import random
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Iterable, List, Optional, Tuple, Union

from ..errors import InvalidConstraint, InvalidRule
from ..models import TileVariant
from .rule_table import CompiledRuleTable
from .search import SearchController, SolverStatus
from .wave import Wave

logger = logging.getLogger(__name__)

Grid = List[List[Optional[TileVariant]]]
InitialCondition = Union[Tuple[int, int, Union[TileVariant, str]], Mapping]


@dataclass(frozen=True)
class StepResult:
    """Progress report returned by every step() call."""
    status: SolverStatus
    grid: Grid                        # solved grid, or best-effort preview
    attempts: int = 0
    depth: int = 0                    # current backtracking stack depth

    @property
    def done(self) -> bool:
        return self.status.is_terminal

    @property
    def no_solution(self) -> bool:
        return self.status is SolverStatus.NO_SOLUTION


class WFCSolver:
    """
    Wave Function Collapse solver for a width x height grid.

    Args:
        width: Grid columns
        height: Grid rows
        rules: Compiled rule table
        initial_conditions: Cells fixed before solving, as (x, y, value)
            tuples or {"x", "y", "value"} mappings; value is a TileVariant
            or a "family angle" label
        rng: Random source for tile choices; pass a seeded random.Random
            for reproducible runs

    Raises:
        ValueError: If the grid size is not positive
        InvalidConstraint: If an initial condition is out of bounds or
            names a variant the rules do not contain
    """

    def __init__(
        self,
        width: int,
        height: int,
        rules: CompiledRuleTable,
        initial_conditions: Iterable[InitialCondition] = (),
        rng: Optional[random.Random] = None
    ):
        if width < 1 or height < 1:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rules = rules
        self.rng = rng if rng is not None else random.Random()
        self._raw_conditions = list(initial_conditions)
        self._search: Optional[SearchController] = None
        self.reset()

    # --- Lifecycle ---

    def reset(self, rules: Optional[CompiledRuleTable] = None) -> None:
        """
        Restart from a fresh wave, optionally with a new rule table.
        Initial conditions are kept and re-checked against the rules.
        """
        rules = rules if rules is not None else self.rules
        conditions = self._resolve_conditions(self._raw_conditions, rules)
        self.rules = rules

        wave = Wave(self.width, self.height, range(len(self.rules)))
        for x, y, variant_id in conditions:
            wave.restrict(x, y, {variant_id})

        self._search = SearchController(wave, self.rules, self.rng)
        self._search.start()
        logger.debug(
            "Solver reset: %dx%d grid, %d variants, %d fixed cells",
            self.width, self.height, len(self.rules), len(conditions)
        )

    def step(self) -> StepResult:
        """Advance the search by one collapse or one backtrack."""
        self._search.step()
        return StepResult(
            status=self.status,
            grid=self.get_output(),
            attempts=self.attempts,
            depth=self.stack_depth
        )

    def run_to_completion(self, max_steps: Optional[int] = None) -> Grid:
        """
        Step until solved or no solution remains.
        With max_steps, stop early and return the best-effort grid.
        """
        steps = 0
        while not self.is_done():
            if max_steps is not None and steps >= max_steps:
                logger.warning("Stopped after %d steps without finishing", steps)
                break
            self._search.step()
            steps += 1
        return self.get_output()

    # --- State ---

    @property
    def status(self) -> SolverStatus:
        return self._search.status

    def is_done(self) -> bool:
        return self.status.is_terminal

    @property
    def attempts(self) -> int:
        return self._search.attempts

    @property
    def backtracks(self) -> int:
        return self._search.backtracks

    @property
    def collapses(self) -> int:
        return self._search.collapses

    @property
    def stack_depth(self) -> int:
        return len(self._search.stack)

    def possibilities(self, x: int, y: int) -> frozenset:
        """Variants still possible at a cell."""
        return frozenset(self.rules.variant(i) for i in self._search.wave[x, y])

    # --- Output ---

    def get_output(self) -> Grid:
        """
        Rows of chosen variants.

        When solved every cell holds its single variant. Otherwise each
        undecided cell shows its heaviest possibility (lowest id on ties)
        and empty cells are None; this preview is not a solution.
        """
        wave = self._search.wave
        grid = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                cell = wave[x, y]
                if not cell:
                    row.append(None)
                else:
                    best = min(cell, key=lambda i: (-self.rules.weight(i), i))
                    row.append(self.rules.variant(best))
            grid.append(row)
        return grid

    def get_output_labels(self) -> List[List[Optional[str]]]:
        """Output grid as "family angle" labels."""
        return [[v.label if v is not None else None for v in row] for row in self.get_output()]

    # --- Helpers ---

    def _resolve_conditions(self, conditions, rules: CompiledRuleTable) -> List[Tuple[int, int, int]]:
        resolved = []
        for condition in conditions:
            if isinstance(condition, Mapping):
                try:
                    x, y, value = condition['x'], condition['y'], condition['value']
                except KeyError as e:
                    raise InvalidConstraint(f"Initial condition {condition!r} is missing {e}")
            else:
                try:
                    x, y, value = condition
                except (TypeError, ValueError):
                    raise InvalidConstraint(f"Initial condition {condition!r} is not (x, y, value)")

            if not _is_coordinate(x) or not _is_coordinate(y) \
                    or not (0 <= x < self.width and 0 <= y < self.height):
                raise InvalidConstraint(
                    f"Initial condition at ({x}, {y}) is outside the {self.width}x{self.height} grid"
                )
            try:
                variant_id = rules.index_of(value)
            except (KeyError, TypeError, InvalidRule):
                raise InvalidConstraint(f"Initial condition at ({x}, {y}) uses unknown tile {value!r}")
            resolved.append((x, y, variant_id))
        return resolved


def _is_coordinate(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
