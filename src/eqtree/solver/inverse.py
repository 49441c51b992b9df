"""Inverse-operation rules used to peel a node off the variable's side.

A rule receives the node being removed, the index of the child that holds
the target variable, and the current other side of the equation. It returns
the new other side, so that ``child = new_other`` is equivalent to
``node = other``.

The table covers the four built-in operations. Custom node types can take
part in solving by registering their own rule with ``register_inverse``.
"""

from __future__ import annotations

from typing import Callable
import logging

from eqtree.errors import DivisionByZero
from eqtree.expression.evaluator import constant_value
from eqtree.expression.nodes import (
    Add,
    Divide,
    Expression,
    Multiply,
    Subtract,
)

logger = logging.getLogger(__name__)


InverseRule = Callable[[Expression, int, Expression], Expression]


def _siblings(node: Expression, index: int) -> list[Expression]:
    """Children other than the one at ``index``, in stored order."""
    return [child for i, child in enumerate(node.children) if i != index]


def invert_add(node: Expression, index: int, other: Expression) -> Expression:
    """a + x + b = R  ->  x = R - a - b"""
    siblings = _siblings(node, index)
    if not siblings:
        return other
    return Subtract([other, *siblings])


def invert_subtract(node: Expression, index: int, other: Expression) -> Expression:
    """x - a - b = R  ->  x = R + a + b;  a - x - b = R  ->  x = a - b - R"""
    siblings = _siblings(node, index)
    if not siblings:
        return other
    if index == 0:
        return Add([other, *siblings])
    return Subtract([*siblings, other])


def invert_multiply(node: Expression, index: int, other: Expression) -> Expression:
    """a * x * b = R  ->  x = R / a / b"""
    siblings = _siblings(node, index)
    if not siblings:
        return other
    for sibling in siblings:
        if constant_value(sibling) == 0.0:
            raise DivisionByZero(
                f"Cannot divide by constant factor {sibling} equal to zero"
            )
    return Divide([other, *siblings])


def invert_divide(node: Expression, index: int, other: Expression) -> Expression:
    """x / a / b = R  ->  x = R * a * b;  a / x / b = R  ->  x = a / b / R"""
    siblings = _siblings(node, index)
    if not siblings:
        return other
    if index == 0:
        return Multiply([other, *siblings])
    if constant_value(other) == 0.0:
        raise DivisionByZero(
            f"Cannot isolate a divisor when the other side {other} equals zero"
        )
    return Divide([*siblings, other])


INVERSE_RULES: dict[type, InverseRule] = {
    Add: invert_add,
    Subtract: invert_subtract,
    Multiply: invert_multiply,
    Divide: invert_divide,
}


def register_inverse(node_type: type, rule: InverseRule) -> None:
    """Register how to undo a custom node type during solving.

    Args:
        node_type: Expression subclass the rule applies to (and its subclasses)
        rule: Callable ``(node, index, other_side) -> new_other_side``
    """
    if not (isinstance(node_type, type) and issubclass(node_type, Expression)):
        raise TypeError(f"Inverse rules can only be registered for Expression types, got {node_type!r}")
    if node_type in INVERSE_RULES:
        logger.warning(f"Overwriting existing inverse rule for {node_type.__name__}")
    INVERSE_RULES[node_type] = rule


def unregister_inverse(node_type: type) -> None:
    """Remove a previously registered rule."""
    INVERSE_RULES.pop(node_type, None)


def get_inverse_rule(node: Expression) -> InverseRule | None:
    """Find the rule for a node, honouring subclassing."""
    for cls in type(node).__mro__:
        rule = INVERSE_RULES.get(cls)
        if rule is not None:
            return rule
    return None
