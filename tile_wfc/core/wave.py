"""
The wave: per-cell sets of still-possible variant ids.
"""

from typing import Iterable, Iterator, List, Set, Tuple

Snapshot = Tuple[Tuple[frozenset, ...], ...]


class Wave:
    """
    Mutable height x width grid of possibility sets.

    Cells are addressed as (x, y) with y growing downwards. A cell holding
    exactly one id is collapsed; an empty cell is a contradiction.
    """

    def __init__(self, width: int, height: int, variant_ids: Iterable[int] = ()):
        if width < 1 or height < 1:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        ids = frozenset(variant_ids)
        self._cells: List[List[Set[int]]] = [
            [set(ids) for _ in range(width)] for _ in range(height)
        ]

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot) -> 'Wave':
        """Build an independent live wave from a snapshot."""
        wave = cls(len(snapshot[0]), len(snapshot))
        wave._cells = [[set(cell) for cell in row] for row in snapshot]
        return wave

    def snapshot(self) -> Snapshot:
        """Immutable deep copy of every cell."""
        return tuple(tuple(frozenset(cell) for cell in row) for row in self._cells)

    def __getitem__(self, pos: Tuple[int, int]) -> Set[int]:
        x, y = pos
        return self._cells[y][x]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cells(self) -> Iterator[Tuple[int, int]]:
        """All cell positions in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y

    def collapse(self, x: int, y: int, variant_id: int) -> None:
        """Reduce a cell to a single variant."""
        self._cells[y][x] = {variant_id}

    def restrict(self, x: int, y: int, variant_ids: Iterable[int]) -> None:
        """Keep only the given variants at a cell; may leave it empty."""
        self._cells[y][x].intersection_update(variant_ids)

    def remove(self, x: int, y: int, variant_id: int) -> None:
        self._cells[y][x].discard(variant_id)

    def is_collapsed(self, x: int, y: int) -> bool:
        return len(self._cells[y][x]) == 1

    def is_fully_collapsed(self) -> bool:
        return all(len(cell) == 1 for row in self._cells for cell in row)

    def has_contradiction(self) -> bool:
        return any(not cell for row in self._cells for cell in row)

    def collapsed_count(self) -> int:
        return sum(1 for row in self._cells for cell in row if len(cell) == 1)
