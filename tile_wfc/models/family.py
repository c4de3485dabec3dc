from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TileFamily:
    """
    A named tile type before rotation expansion, as written in a rule file.
    Neighbour lists hold "<family> <angle>" references in this family's
    base orientation.
    """
    name: str
    symmetry: int = 1                 # 1, 2 or 4 distinct rotations
    weight: float = 1.0               # relative selection weight, may be fractional
    up: list[str] = field(default_factory=list)
    right: list[str] = field(default_factory=list)
    down: list[str] = field(default_factory=list)
    left: list[str] = field(default_factory=list)

    def neighbors(self, side: str) -> list[str]:
        """Declared neighbour references for one side."""
        return getattr(self, side)

    def to_dict(self) -> dict:
        return {
            'symmetry': self.symmetry,
            'weight': self.weight,
            'up': list(self.up),
            'right': list(self.right),
            'down': list(self.down),
            'left': list(self.left)
        }

    @classmethod
    def from_dict(cls, name: str, data: dict) -> 'TileFamily':
        weight: Optional[float] = data.get('weight')
        return cls(
            name=name,
            symmetry=data.get('symmetry'),
            weight=1.0 if weight is None else weight,
            up=data.get('up') or [],
            right=data.get('right') or [],
            down=data.get('down') or [],
            left=data.get('left') or []
        )
