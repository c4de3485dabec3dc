"""
Compiled, rotation-expanded adjacency table.

The solver works on dense integer ids; TileVariant objects and their string
labels only appear at the edges (compiling, initial conditions, output).
"""

from typing import Dict, Iterable, Iterator, List, Tuple, Union

from ..errors import InvalidRule
from ..models import CompiledRule, TileVariant
from .transform import SIDES


class CompiledRuleTable:
    """Immutable lookup of variants, their allowed neighbours and weights."""

    def __init__(self, rules: Iterable[CompiledRule]):
        self._rules: Tuple[CompiledRule, ...] = tuple(rules)
        self._index: Dict[TileVariant, int] = {}

        for i, rule in enumerate(self._rules):
            if rule.variant in self._index:
                raise InvalidRule(f"Variant '{rule.variant}' is declared twice")
            if not isinstance(rule.weight, int) or rule.weight < 1:
                raise InvalidRule(f"Variant '{rule.variant}' has weight {rule.weight!r}, expected an integer >= 1")
            self._index[rule.variant] = i

        # {side: (allowed ids of variant 0, allowed ids of variant 1, ...)}
        self._allowed: Dict[str, Tuple[frozenset, ...]] = {}
        for side in SIDES:
            per_variant = []
            for rule in self._rules:
                ids = []
                for neighbor in rule.neighbors(side):
                    if neighbor not in self._index:
                        raise InvalidRule(
                            f"Variant '{rule.variant}' allows unknown variant '{neighbor}' on {side}"
                        )
                    ids.append(self._index[neighbor])
                per_variant.append(frozenset(ids))
            self._allowed[side] = tuple(per_variant)

        self._weights: Tuple[int, ...] = tuple(rule.weight for rule in self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[TileVariant]:
        return (rule.variant for rule in self._rules)

    def __contains__(self, variant) -> bool:
        return variant in self._index

    def __repr__(self) -> str:
        return f"CompiledRuleTable({len(self)} variants)"

    @property
    def variants(self) -> Tuple[TileVariant, ...]:
        return tuple(rule.variant for rule in self._rules)

    @property
    def rules(self) -> Tuple[CompiledRule, ...]:
        return self._rules

    @property
    def weights(self) -> Tuple[int, ...]:
        return self._weights

    def index_of(self, variant: Union[TileVariant, str]) -> int:
        """
        Get the integer id of a variant.

        Raises:
            KeyError: If the variant is not part of this table
        """
        if isinstance(variant, str):
            variant = TileVariant.parse(variant)
        return self._index[variant]

    def variant(self, index: int) -> TileVariant:
        return self._rules[index].variant

    def rule(self, variant: Union[TileVariant, str]) -> CompiledRule:
        return self._rules[self.index_of(variant)]

    def weight(self, index: int) -> int:
        return self._weights[index]

    def allowed(self, index: int, side: str) -> frozenset:
        """Ids that variant `index` allows as its neighbour on `side`."""
        return self._allowed[side][index]

    def can_be_neighbor(self, tile: TileVariant, side: str, neighbor: TileVariant) -> bool:
        """Check if neighbor can be placed on the given side of tile."""
        return neighbor in self.rule(tile).neighbors(side)

    # --- Serialization ---

    def to_dict(self) -> Dict[str, dict]:
        """Label keyed form: {"family angle": {up, right, down, left, weight}}."""
        return {rule.variant.label: rule.to_dict() for rule in self._rules}

    @classmethod
    def from_dict(cls, data: Dict[str, dict]) -> 'CompiledRuleTable':
        return cls(CompiledRule.from_dict(label, entry) for label, entry in data.items())

    def labels(self) -> List[str]:
        return [rule.variant.label for rule in self._rules]
