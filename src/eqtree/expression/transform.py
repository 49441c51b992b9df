"""Tree-to-tree transformations.

- simplify: Fold constants and drop arithmetic identities
- expand: Distribute division over sums, (a + b) / c -> a / c + b / c
- substitute: Replace variables with expressions or numbers
- compare_structure: Shape comparison ignoring leaf contents
- collect_summations / get_coefficient: Read additive terms and their factors

Every transformation returns a new tree; inputs are never modified.
"""

from __future__ import annotations

from typing import Any, Mapping

from eqtree.errors import DivisionByZero, UnsupportedOperation
from eqtree.expression.evaluator import constant_value
from eqtree.expression.nodes import (
    Add,
    Divide,
    Expression,
    Multiply,
    Operation,
    Subtract,
    Value,
    Variable,
    as_expression,
)


def _rebuild(node: Expression, children: list[Expression]) -> Expression:
    """Same node with new children, for built-in and custom nodes alike."""
    if list(node.children) == children:
        return node
    with_children = getattr(node, "with_children", None)
    if with_children is None:
        raise UnsupportedOperation(f"Cannot rebuild {type(node).__name__} with new children")
    return with_children(children)


def _is_value(node: Expression, value: float) -> bool:
    return isinstance(node, Value) and node.value == value


def _flatten(node: Operation, children: list[Expression]) -> list[Expression]:
    """Inline children of the same commutative kind."""
    flat: list[Expression] = []
    for child in children:
        if type(child) is type(node):
            flat.extend(child.children)
        else:
            flat.append(child)
    return flat


def _combine_constants(node: Operation, children: list[Expression]) -> list[Expression]:
    """Merge plain ``Value`` children of a commutative node into one."""
    constants = [c for c in children if isinstance(c, Value)]
    if len(constants) < 2:
        return children
    others = [c for c in children if not isinstance(c, Value)]
    merged = Value(constant_value(type(node)(constants)))
    # 2 * x reads better than x * 2; x + 3 better than 3 + x
    return [merged, *others] if isinstance(node, Multiply) else [*others, merged]


def _simplify_operation(node: Operation, children: list[Expression]) -> Expression:
    identity = node.kind.spec.identity

    if node.kind.spec.commutative:
        children = _combine_constants(node, _flatten(node, children))
        if isinstance(node, Multiply) and any(_is_value(c, 0.0) for c in children):
            return Value(0.0)
        children = [c for c in children if not _is_value(c, identity)] or [Value(identity)]

    else:
        # Subtract / Divide: only a left-nested chain can be merged
        first, rest = children[0], children[1:]
        if type(first) is type(node):
            first, rest = first.children[0], [*first.children[1:], *rest]
        children = [first, *(c for c in rest if not _is_value(c, identity))]

    if len(children) == 1:
        return children[0]
    return node.with_children(children)


def simplify(expression: Expression) -> Expression:
    """Fold constants and remove identity elements.

    Rules, applied bottom-up:
    - Pure-constant subtrees become a single ``Value`` (unless they divide by zero)
    - Nested ``Add``/``Multiply`` nodes are flattened and their constants merged
    - ``+ 0``, ``- 0``, ``* 1`` and ``/ 1`` are dropped; ``* 0`` becomes ``0``
    - Single-child operations collapse into their child

    Args:
        expression: Tree to simplify

    Returns:
        A new, equivalent tree
    """
    if expression.is_leaf():
        return expression

    if not isinstance(expression, Operation):
        # Custom nodes are kept as-is unless they know how to rebuild themselves
        if not hasattr(expression, "with_children"):
            return expression
        return _rebuild(expression, [simplify(child) for child in expression.children])

    children = [simplify(child) for child in expression.children]

    try:
        value = constant_value(expression.with_children(children))
    except DivisionByZero:
        value = None
    if value is not None:
        return Value(value)

    return _simplify_operation(expression, children)


def _distribute(node: Divide) -> Expression:
    numerator, divisors = node.children[0], node.children[1:]
    if not divisors or not isinstance(numerator, (Add, Subtract)):
        return node
    # (a - b) / c keeps its subtraction: a / c - b / c
    return numerator.with_children(
        [_distribute(node.with_children([term, *divisors])) for term in numerator.children]
    )


def expand(expression: Expression) -> Expression:
    """Distribute division over sums and differences in the numerator.

    ``(a + b) / c`` becomes ``a / c + b / c`` and ``(a - b) / c / d`` becomes
    ``a / c / d - b / c / d``. Applied bottom-up, so nested sums are
    distributed all the way down. Division by a sum is left alone.

    Args:
        expression: Tree to rewrite

    Returns:
        A new, equivalent tree
    """
    if expression.is_leaf():
        return expression

    children = [expand(child) for child in expression.children]
    if not isinstance(expression, Operation):
        if not hasattr(expression, "with_children"):
            return expression
        return _rebuild(expression, children)

    node = expression.with_children(children)
    if isinstance(node, Divide):
        return _distribute(node)
    return node


def _negate(term: Expression) -> Expression:
    if isinstance(term, Value):
        return Value(-term.value)
    if isinstance(term, Multiply) and isinstance(term.children[0], Value):
        factor, *rest = term.children
        return term.with_children([Value(-factor.value), *rest])
    return Multiply([Value(-1.0), term])


def collect_summations(expression: Expression) -> list[Expression]:
    """Split an expression into the terms that are added together.

    Nested ``Add`` and ``Subtract`` nodes are walked left to right. Terms that
    are subtracted come back negated, as ``Value(-v)`` or ``-1.0 * term``, so
    the result always sums to the original expression.

    ``a + 2 * b - (c - 3)`` gives ``a``, ``2.0 * b``, ``-1.0 * c`` and ``3.0``.
    """
    if isinstance(expression, Add):
        return [term for child in expression.children for term in collect_summations(child)]
    if isinstance(expression, Subtract):
        first, *rest = expression.children
        terms = collect_summations(first)
        for child in rest:
            terms.extend(_negate(term) for term in collect_summations(child))
        return terms
    return [expression]


def get_coefficient(expression: Expression) -> float | None:
    """Numeric factor of a single term.

    - ``Value``: the value itself
    - ``Variable``: 1.0
    - ``Multiply``: product of its children's coefficients, skipping children without one
    - ``Divide``: the first child's coefficient (1.0 if it has none) over its ``Value`` divisors
    - anything else: None

    Raises:
        DivisionByZero: If a ``Value`` divisor is zero
    """
    if isinstance(expression, Value):
        return expression.value
    if isinstance(expression, Variable):
        return 1.0
    if isinstance(expression, Multiply):
        coefficient = 1.0
        for child in expression.children:
            factor = get_coefficient(child)
            if factor is not None:
                coefficient *= factor
        return coefficient
    if isinstance(expression, Divide):
        numerator = get_coefficient(expression.children[0])
        if numerator is None:
            numerator = 1.0
        for divisor in expression.children[1:]:
            if not isinstance(divisor, Value):
                continue
            if divisor.value == 0.0:
                raise DivisionByZero(f"Coefficient of {expression} divides by zero")
            numerator /= divisor.value
        return numerator
    return None


def substitute(expression: Expression, mapping: Mapping[str, Any]) -> Expression:
    """Replace variables by name.

    Args:
        expression: Tree to rewrite
        mapping: Variable name to replacement expression or number

    Returns:
        New tree with every listed variable replaced
    """
    replacements = {name: as_expression(value) for name, value in mapping.items()}

    def _substitute(node: Expression) -> Expression:
        if isinstance(node, Variable):
            return replacements.get(node.name, node)
        if node.is_leaf():
            return node
        return _rebuild(node, [_substitute(child) for child in node.children])

    return _substitute(expression)


def compare_structure(left: Expression, right: Expression) -> bool:
    """Check whether two trees have the same shape.

    Operation kinds and arities must match; any leaf matches any other leaf.
    """
    if left.is_leaf() and right.is_leaf():
        return True
    if type(left) is not type(right) or len(left.children) != len(right.children):
        return False
    return all(compare_structure(a, b) for a, b in zip(left.children, right.children))
