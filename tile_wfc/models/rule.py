from dataclasses import dataclass

from .variant import TileVariant


@dataclass(frozen=True)
class CompiledRule:
    """
    Expanded adjacency entry for one tile variant: the variants allowed on
    each side and the integer selection weight.
    """
    variant: TileVariant
    up: tuple[TileVariant, ...] = ()
    right: tuple[TileVariant, ...] = ()
    down: tuple[TileVariant, ...] = ()
    left: tuple[TileVariant, ...] = ()
    weight: int = 1

    def neighbors(self, side: str) -> tuple[TileVariant, ...]:
        """Allowed neighbours on one side."""
        return getattr(self, side)

    def to_dict(self) -> dict:
        return {
            'up': [v.label for v in self.up],
            'right': [v.label for v in self.right],
            'down': [v.label for v in self.down],
            'left': [v.label for v in self.left],
            'weight': self.weight
        }

    @classmethod
    def from_dict(cls, label: str, data: dict) -> 'CompiledRule':
        return cls(
            variant=TileVariant.parse(label),
            up=tuple(TileVariant.parse(v) for v in data.get('up', [])),
            right=tuple(TileVariant.parse(v) for v in data.get('right', [])),
            down=tuple(TileVariant.parse(v) for v in data.get('down', [])),
            left=tuple(TileVariant.parse(v) for v in data.get('left', [])),
            weight=int(data.get('weight', 1))
        )
