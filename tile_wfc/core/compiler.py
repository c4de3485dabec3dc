"""
Compile a hand-written adjacency specification into a full rule table.

Each tile family is expanded into one variant per distinct rotation. The
declared neighbour lists are rotated along with the tile, every adjacency is
made visible from both sides, and family weights are turned into integer
replication counts.
"""

import logging
import math
from fractions import Fraction
from numbers import Real
from collections.abc import Mapping
from typing import Dict, List

from ..errors import InvalidRule, InvalidSymmetry
from ..models import CompiledRule, TileFamily, TileVariant
from .rule_table import CompiledRuleTable
from .transform import SIDES, get_opposite_side, rotate_angle, source_side, symmetry_angles

logger = logging.getLogger(__name__)

VALID_SYMMETRIES = (1, 2, 4)


def compile_rules(spec: Mapping[str, dict]) -> CompiledRuleTable:
    """
    Expand a rule specification into a CompiledRuleTable.

    Args:
        spec: Mapping of family name to {symmetry, weight?, up, right, down, left}

    Returns:
        Mutually consistent table with integer weights (minimum exactly 1)

    Raises:
        InvalidSymmetry: If a family's symmetry is not 1, 2 or 4
        InvalidRule: For any other malformed entry or unknown neighbour family
    """
    families = parse_families(spec)
    by_name = {family.name: family for family in families}

    # {variant: {side: [neighbour variants]}}, insertion ordered
    expanded: Dict[TileVariant, Dict[str, List[TileVariant]]] = {}
    raw_weights: Dict[TileVariant, float] = {}

    for family in families:
        for angle in symmetry_angles(family.symmetry):
            variant = TileVariant(family.name, angle)
            sides = {}
            for side in SIDES:
                declared = family.neighbors(source_side(side, angle))
                sides[side] = _dedupe(_rotate_reference(ref, angle, by_name) for ref in declared)
            expanded[variant] = sides
            raw_weights[variant] = family.weight

    added = _close_adjacency(expanded)
    if added:
        logger.debug("Added %d reverse adjacencies missing from the specification", added)

    weights = _normalize_weights(raw_weights)

    rules = [
        CompiledRule(
            variant=variant,
            up=tuple(sides['up']),
            right=tuple(sides['right']),
            down=tuple(sides['down']),
            left=tuple(sides['left']),
            weight=weights[variant]
        )
        for variant, sides in expanded.items()
    ]
    logger.debug("Compiled %d families into %d variants", len(families), len(rules))
    return CompiledRuleTable(rules)


def parse_families(spec: Mapping[str, dict]) -> List[TileFamily]:
    """Validate a rule specification and return its families in declaration order."""
    if not isinstance(spec, Mapping):
        raise InvalidRule(f"Rule specification must be a mapping, got {type(spec).__name__}")
    if not spec:
        raise InvalidRule("Rule specification declares no tile families")

    families = []
    for name, data in spec.items():
        if not isinstance(name, str) or not name.strip() or ' ' in name.strip():
            raise InvalidRule(f"Invalid family name {name!r}")
        if not isinstance(data, Mapping):
            raise InvalidRule(f"Family '{name}' must be a mapping")

        symmetry = data.get('symmetry')
        if isinstance(symmetry, bool) or symmetry not in VALID_SYMMETRIES:
            raise InvalidSymmetry(name, symmetry)

        weight = data.get('weight')
        if weight is not None:
            if isinstance(weight, bool) or not isinstance(weight, Real) \
                    or not math.isfinite(weight) or weight <= 0:
                raise InvalidRule(f"Family '{name}' has weight {weight!r}, expected a positive number")

        for side in SIDES:
            refs = data.get(side)
            if refs is None:
                continue
            if isinstance(refs, str) or not isinstance(refs, (list, tuple)):
                raise InvalidRule(f"Family '{name}' side '{side}' must be a list of tile references")

        families.append(TileFamily.from_dict(name, data))

    declared = {family.name for family in families}
    for family in families:
        for side in SIDES:
            for ref in family.neighbors(side):
                neighbor = TileVariant.parse(ref)
                if neighbor.family not in declared:
                    raise InvalidRule(
                        f"Family '{family.name}' references undeclared family "
                        f"'{neighbor.family}' on {side}"
                    )
    return families


def _rotate_reference(ref: str, rotation: int, families: Dict[str, TileFamily]) -> TileVariant:
    """Rotate a neighbour reference together with the tile that declares it."""
    neighbor = TileVariant.parse(ref)
    symmetry = families[neighbor.family].symmetry
    return TileVariant(neighbor.family, rotate_angle(neighbor.angle, rotation, symmetry))


def _dedupe(variants) -> List[TileVariant]:
    seen = set()
    result = []
    for variant in variants:
        if variant not in seen:
            seen.add(variant)
            result.append(variant)
    return result


def _close_adjacency(expanded: Dict[TileVariant, Dict[str, List[TileVariant]]]) -> int:
    """
    Make every adjacency visible from both tiles.
    If A allows B on its right, B must allow A on its left.

    Returns:
        Number of reverse entries appended
    """
    added = 0
    for variant, sides in expanded.items():
        for side in SIDES:
            opposite = get_opposite_side(side)
            for neighbor in sides[side]:
                reverse = expanded[neighbor][opposite]
                if variant not in reverse:
                    reverse.append(variant)
                    added += 1
    return added


def _normalize_weights(weights: Dict[TileVariant, float]) -> Dict[TileVariant, int]:
    """
    Scale weights so the smallest becomes 1 and all are integers.
    Weights are divided as the decimals they are written as, so 0.3 / 0.1
    is exactly 3 and any excess over an integer rounds up.
    """
    exact = {variant: Fraction(str(weight)) for variant, weight in weights.items()}
    minimum = min(exact.values())
    return {
        variant: max(1, math.ceil(weight / minimum))
        for variant, weight in exact.items()
    }
