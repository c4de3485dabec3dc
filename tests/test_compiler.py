"""Tests for tile_wfc.core.compiler module."""

import pytest

from tile_wfc import InvalidRule, InvalidSymmetry, TileVariant, compile_rules
from tile_wfc.core import SIDES, get_opposite_side, validate_rule_table


def v(label: str) -> TileVariant:
    return TileVariant.parse(label)


class TestVariantExpansion:
    """Tests for expanding families into rotated variants."""

    def test_angles_follow_symmetry(self):
        table = compile_rules({
            "dot": {"symmetry": 1},
            "rail": {"symmetry": 2},
            "arrow": {"symmetry": 4},
        })

        assert table.labels() == [
            "dot 0",
            "rail 0", "rail 90",
            "arrow 0", "arrow 90", "arrow 180", "arrow 270",
        ]

    def test_rail_example(self):
        """A lone class 2 family with weight 2."""
        table = compile_rules({"rail": {"symmetry": 2, "weight": 2, "up": ["rail 0"]}})

        assert table.variants == (v("rail 0"), v("rail 90"))
        assert table.rule("rail 0").up == (v("rail 0"),)
        assert table.rule("rail 0").down == (v("rail 0"),)
        assert table.rule("rail 90").right == (v("rail 90"),)
        assert table.rule("rail 90").left == (v("rail 90"),)
        assert table.rule("rail 90").up == ()
        assert table.weights == (1, 1)

    def test_missing_sides_are_empty(self):
        table = compile_rules({"dot": {"symmetry": 1}})

        rule = table.rule("dot 0")
        assert all(rule.neighbors(side) == () for side in SIDES)


class TestRotation:
    """Tests for rotating neighbour lists with the tile."""

    @pytest.fixture
    def table(self):
        return compile_rules({
            "arrow": {"symmetry": 4, "up": ["arrow 0"], "right": ["dot 0"]},
            "dot": {"symmetry": 1},
        })

    def test_base_orientation_unchanged(self, table):
        rule = table.rule("arrow 0")
        assert rule.up == (v("arrow 0"),)
        assert rule.right == (v("dot 0"),)

    def test_quarter_turn_moves_sides_clockwise(self, table):
        rule = table.rule("arrow 90")
        assert rule.right == (v("arrow 90"),)
        assert rule.down == (v("dot 0"),)

    def test_half_turn(self, table):
        rule = table.rule("arrow 180")
        assert rule.down == (v("arrow 180"),)
        assert rule.left == (v("dot 0"),)

    def test_three_quarter_turn(self, table):
        rule = table.rule("arrow 270")
        assert rule.left == (v("arrow 270"),)
        assert rule.up == (v("dot 0"),)

    def test_symmetric_neighbor_stays_at_zero(self, table):
        for variant in table:
            for side in SIDES:
                for neighbor in table.rule(variant).neighbors(side):
                    if neighbor.family == "dot":
                        assert neighbor.angle == 0

    def test_class_two_neighbor_folds_to_half_turn(self):
        table = compile_rules({
            "arrow": {"symmetry": 4, "up": ["rail 90"]},
            "rail": {"symmetry": 2},
        })

        assert table.rule("arrow 90").right == (v("rail 0"),)
        assert table.rule("arrow 180").down == (v("rail 90"),)
        assert table.rule("arrow 270").left == (v("rail 0"),)


class TestClosure:
    """Tests for the mutual consistency pass."""

    def test_one_sided_rule_is_mirrored(self):
        table = compile_rules({
            "a": {"symmetry": 1, "right": ["b 0"]},
            "b": {"symmetry": 1},
        })

        assert table.rule("b 0").left == (v("a 0"),)

    def test_declared_both_ways_not_duplicated(self):
        table = compile_rules({
            "a": {"symmetry": 1, "right": ["b 0", "b 0"]},
            "b": {"symmetry": 1, "left": ["a 0"]},
        })

        assert table.rule("a 0").right == (v("b 0"),)
        assert table.rule("b 0").left == (v("a 0"),)

    def test_rotated_rules_are_mutually_consistent(self, skatepark_table):
        for rule in skatepark_table.rules:
            for side in SIDES:
                for neighbor in rule.neighbors(side):
                    opposite = skatepark_table.rule(neighbor).neighbors(get_opposite_side(side))
                    assert rule.variant in opposite

        assert validate_rule_table(skatepark_table) == []


class TestWeights:
    """Tests for weight normalisation."""

    def test_default_weight_is_one(self, skatepark_table):
        assert set(skatepark_table.weights) == {1}

    def test_fractional_weights_scaled_to_integers(self):
        table = compile_rules({
            "floor": {"symmetry": 1, "weight": 0.5},
            "box": {"symmetry": 4, "weight": 0.1},
            "rail": {"symmetry": 2, "weight": 2},
            "steps": {"symmetry": 1, "weight": 0.3},
        })

        assert table.weight(table.index_of("floor 0")) == 5
        assert table.weight(table.index_of("rail 90")) == 20
        assert table.weight(table.index_of("steps 0")) == 3
        assert all(table.weight(table.index_of(f"box {a}")) == 1 for a in (0, 90, 180, 270))

    def test_minimum_weight_is_exactly_one(self):
        table = compile_rules({
            "a": {"symmetry": 1, "weight": 7},
            "b": {"symmetry": 1, "weight": 2.5},
        })

        assert min(table.weights) == 1
        assert table.weights == (3, 1)
        assert all(isinstance(w, int) for w in table.weights)

    def test_weight_slightly_above_minimum_rounds_up(self):
        table = compile_rules({
            "a": {"symmetry": 1, "weight": 1.0},
            "b": {"symmetry": 1, "weight": 1.0000000001},
        })

        assert table.weights == (1, 2)


class TestInvalidSpecs:
    """Tests for rejected specifications."""

    @pytest.mark.parametrize("symmetry", [0, 3, 8, "4", None, True])
    def test_invalid_symmetry(self, symmetry):
        with pytest.raises(InvalidSymmetry):
            compile_rules({"a": {"symmetry": symmetry}})

    def test_invalid_symmetry_is_an_invalid_rule(self):
        with pytest.raises(InvalidRule):
            compile_rules({"a": {"symmetry": 3}})

    def test_undeclared_neighbor_family(self):
        with pytest.raises(InvalidRule, match="undeclared family 'ghost'"):
            compile_rules({"a": {"symmetry": 1, "up": ["ghost 0"]}})

    @pytest.mark.parametrize("ref", ["a", "a 45", "a zero", ""])
    def test_malformed_reference(self, ref):
        with pytest.raises(InvalidRule):
            compile_rules({"a": {"symmetry": 1, "up": [ref]}})

    def test_side_must_be_a_list(self):
        with pytest.raises(InvalidRule):
            compile_rules({"a": {"symmetry": 1, "up": "a 0"}})

    @pytest.mark.parametrize("weight", [0, -1, "heavy", float("inf")])
    def test_invalid_weight(self, weight):
        with pytest.raises(InvalidRule):
            compile_rules({"a": {"symmetry": 1, "weight": weight}})

    def test_empty_spec(self):
        with pytest.raises(InvalidRule):
            compile_rules({})
