"""Tests for simplify, expand, substitute, compare_structure and term helpers."""

import pytest

from conftest import Absolute, Negate
from eqtree.errors import DivisionByZero, UnsupportedOperation
from eqtree.expression.evaluator import evaluate
from eqtree.expression.nodes import Add, Divide, Multiply, Subtract, Value, Variable
from eqtree.expression.parser import parse_expression
from eqtree.expression.renderer import render
from eqtree.expression.transform import (
    collect_summations,
    compare_structure,
    expand,
    get_coefficient,
    simplify,
    substitute,
)


class TestSimplify:
    """Test constant folding and identity removal."""

    def test_constant_tree_folds(self):
        tree = Divide([Subtract([Value(11.0), Value(3.0)]), Value(2.0)])
        assert simplify(tree) == Value(4.0)

    def test_leaves_unchanged(self, x):
        assert simplify(x) is x
        assert simplify(Value(2.0)) == Value(2.0)

    def test_merge_constant_factors(self, x):
        tree = Multiply([Value(2.0), x, Value(3.0)])
        assert simplify(tree) == Multiply([Value(6.0), x])
        assert render(simplify(tree)) == "6.0 * x"

    def test_merge_constant_terms(self, x):
        assert simplify(Add([Value(1.0), x, Value(2.0)])) == Add([x, Value(3.0)])

    def test_additive_identity(self, x):
        assert simplify(Add([x, Value(0.0)])) == x
        assert simplify(Subtract([x, Value(0.0)])) == x

    def test_multiplicative_identity(self, x):
        assert simplify(Multiply([Value(1.0), x])) == x
        assert simplify(Divide([x, Value(1.0)])) == x

    def test_multiply_by_zero(self, x):
        assert simplify(Multiply([x, Value(0.0)])) == Value(0.0)

    def test_leading_zero_kept_for_subtract(self, x):
        """0 - x is not x."""
        assert simplify(Subtract([Value(0.0), x])) == Subtract([Value(0.0), x])

    def test_nested_chains_flatten(self, x, y):
        assert simplify(Add([x, Add([y, Value(1.0)])])) == Add([x, y, Value(1.0)])
        assert simplify(Subtract([Subtract([x, Value(1.0)]), y])) == Subtract([x, Value(1.0), y])
        assert simplify(Divide([Divide([x, y]), Value(2.0)])) == Divide([x, y, Value(2.0)])

    def test_division_by_zero_left_alone(self, x):
        tree = Divide([Value(1.0), Value(0.0)])
        assert simplify(tree) == tree
        assert simplify(Divide([x, Value(0.0)])) == Divide([x, Value(0.0)])

    def test_custom_node_children_simplified(self):
        assert simplify(Negate(Add([Value(1.0), Value(2.0)]))) == Negate(Value(3.0))

    def test_custom_node_without_rebuild(self):
        tree = Absolute(Add([Value(1.0), Value(2.0)]))
        assert simplify(tree) is tree

    @pytest.mark.parametrize(
        "text",
        ["2 * x * 3 + 0", "(x - 0) / 1 * 4", "x + 1 + 2 - y", "x / 2 / 5 + 3 * 0"],
    )
    def test_preserves_value(self, text):
        tree = parse_expression(text)
        assignments = {"x": 1.7, "y": -0.4}
        assert evaluate(simplify(tree), assignments) == pytest.approx(evaluate(tree, assignments))

    def test_input_not_modified(self, x):
        tree = Add([x, Add([Value(1.0), Value(2.0)])])
        simplify(tree)
        assert tree == Add([x, Add([Value(1.0), Value(2.0)])])


class TestSubstitute:
    """Test variable replacement."""

    def test_replace_with_number(self, x, y):
        assert substitute(Add([x, y]), {"x": 2}) == Add([Value(2.0), y])

    def test_replace_with_expression(self, x, y):
        result = substitute(Multiply([Value(2.0), x]), {"x": Add([y, Value(1.0)])})
        assert result == Multiply([Value(2.0), Add([y, Value(1.0)])])

    def test_all_occurrences(self, x):
        result = substitute(Subtract([x, Divide([x, Value(2.0)])]), {"x": Variable("t")})
        assert result.contains_variable("t")
        assert not result.contains_variable("x")

    def test_unmapped_tree_returned_as_is(self, y):
        tree = Absolute(y)
        assert substitute(tree, {"x": 1.0}) is tree

    def test_custom_nodes(self, x, y):
        assert substitute(Negate(x), {"x": y}) == Negate(y)
        with pytest.raises(UnsupportedOperation):
            substitute(Absolute(x), {"x": y})


class TestCompareStructure:
    """Test shape comparison."""

    def test_leaves_always_match(self, x):
        assert compare_structure(x, Value(1.0))

    def test_same_shape_different_leaves(self, x, y):
        assert compare_structure(
            Add([x, Multiply([Value(2.0), y])]),
            Add([Value(5.0), Multiply([y, x])]),
        )

    def test_kind_mismatch(self, x):
        assert not compare_structure(Add([x, Value(1.0)]), Subtract([x, Value(1.0)]))

    def test_arity_mismatch(self, x):
        assert not compare_structure(Add([x, Value(1.0)]), Add([x, Value(1.0), Value(2.0)]))

    def test_leaf_vs_operation(self, x):
        assert not compare_structure(x, Add([x, Value(1.0)]))


class TestExpand:
    """Test distributing division over sums."""

    def test_sum_over_divisor(self, x, y):
        tree = Divide([Add([x, y]), Value(2.0)])
        assert expand(tree) == Add([Divide([x, Value(2.0)]), Divide([y, Value(2.0)])])

    def test_difference_keeps_its_kind(self, x, y):
        tree = Divide([Subtract([x, y, Value(1.0)]), Value(4.0)])
        assert expand(tree) == Subtract(
            [Divide([x, Value(4.0)]), Divide([y, Value(4.0)]), Divide([Value(1.0), Value(4.0)])]
        )

    def test_every_divisor_is_carried(self, x, y):
        tree = Divide([Add([x, y]), Value(2.0), y])
        assert expand(tree) == Add([Divide([x, Value(2.0), y]), Divide([y, Value(2.0), y])])

    def test_nested_sums_distribute_fully(self, x, y):
        tree = Divide([Add([Subtract([x, y]), Value(1.0)]), Value(2.0)])
        expected = Add(
            [
                Subtract([Divide([x, Value(2.0)]), Divide([y, Value(2.0)])]),
                Divide([Value(1.0), Value(2.0)]),
            ]
        )
        assert expand(tree) == expected

    def test_inner_division_expanded(self, x, y):
        tree = Multiply([Value(3.0), Divide([Add([x, y]), Value(2.0)])])
        assert render(expand(tree)) == "3.0 * (x / 2.0 + y / 2.0)"

    def test_division_by_sum_left_alone(self, x, y):
        tree = Divide([x, Add([y, Value(1.0)])])
        assert expand(tree) == tree
        assert expand(Divide([Add([x, y])])) == Divide([Add([x, y])])

    def test_custom_nodes(self, x, y):
        tree = Negate(Divide([Add([x, y]), Value(2.0)]))
        assert expand(tree) == Negate(Add([Divide([x, Value(2.0)]), Divide([y, Value(2.0)])]))
        opaque = Absolute(Divide([Add([x, y]), Value(2.0)]))
        assert expand(opaque) is opaque

    @pytest.mark.parametrize(
        "text",
        ["(x + y) / 2", "(x - y - 3) / y / 2", "((x + 1) / 2 - y) / 4", "2 * (x + y) / 5"],
    )
    def test_preserves_value(self, text):
        tree = parse_expression(text)
        assignments = {"x": 1.7, "y": -0.4}
        assert evaluate(expand(tree), assignments) == pytest.approx(evaluate(tree, assignments))


class TestTerms:
    """Test collect_summations and get_coefficient."""

    def test_single_term(self, x):
        tree = Multiply([Value(2.0), x])
        assert collect_summations(tree) == [tree]

    def test_nested_sums(self, x, y):
        tree = Add([x, Add([Multiply([Value(2.0), y]), Value(3.0)])])
        assert collect_summations(tree) == [x, Multiply([Value(2.0), y]), Value(3.0)]

    def test_subtracted_terms_are_negated(self, x, y):
        tree = Subtract([x, Subtract([y, Value(3.0)]), Multiply([Value(2.0), x])])
        assert collect_summations(tree) == [
            x,
            Multiply([Value(-1.0), y]),
            Value(3.0),
            Multiply([Value(-2.0), x]),
        ]

    def test_terms_sum_to_original(self):
        tree = parse_expression("a + 2 * b - (c - 3) - d / 4")
        assignments = {"a": 1.5, "b": -2.0, "c": 0.25, "d": 8.0}
        terms = collect_summations(tree)
        assert len(terms) == 5
        assert sum(evaluate(t, assignments) for t in terms) == pytest.approx(
            evaluate(tree, assignments)
        )

    @pytest.mark.parametrize(
        "tree, expected",
        [
            (Value(4.0), 4.0),
            (Variable("x"), 1.0),
            (Multiply([Value(2.0), Variable("x"), Value(3.0)]), 6.0),
            (Multiply([Variable("x"), Variable("y")]), 1.0),
            (Divide([Value(3.0), Value(4.0)]), 0.75),
            (Divide([Multiply([Value(-3.0), Variable("x")]), Value(2.0)]), -1.5),
            (Divide([Variable("x"), Value(4.0), Variable("y")]), 0.25),
        ],
    )
    def test_get_coefficient(self, tree, expected):
        assert get_coefficient(tree) == expected

    def test_no_coefficient(self, x):
        assert get_coefficient(Add([x, Value(1.0)])) is None
        assert get_coefficient(Negate(x)) is None

    def test_coefficient_of_collected_terms(self):
        terms = collect_summations(parse_expression("3 * x - y / 2 - 4"))
        assert [get_coefficient(t) for t in terms] == [3.0, -0.5, -4.0]

    def test_coefficient_divides_by_zero(self, x):
        with pytest.raises(DivisionByZero):
            get_coefficient(Divide([x, Value(0.0)]))
