"""Numeric evaluation of expression trees.

Two evaluation modes:
- Scalar: bottom-up fold to a single float. Dividing by exactly 0.0 or
  reaching a variable without a value raises.
- Vectorised: numpy arrays per variable, used for sampled verification.
  Division by zero yields NaN in the affected positions instead of raising.
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Mapping, Sequence
import operator

import numpy as np

from eqtree.errors import DivisionByZero, UndefinedVariable, UnsupportedOperation
from eqtree.expression.nodes import Expression, Operation, Value, Variable, iter_nodes
from eqtree.expression.types import OperationKind


def _divide(values: Sequence[float]) -> float:
    if any(v == 0.0 for v in values[1:]):
        raise DivisionByZero("Division by zero while evaluating expression")
    return reduce(operator.truediv, values)


# Scalar implementations, folded left to right over the children
OPERATORS: dict[OperationKind, Callable[[Sequence[float]], float]] = {
    OperationKind.ADD: lambda values: reduce(operator.add, values),
    OperationKind.SUBTRACT: lambda values: reduce(operator.sub, values),
    OperationKind.MULTIPLY: lambda values: reduce(operator.mul, values),
    OperationKind.DIVIDE: _divide,
}


def _safe_divide(x: np.ndarray, y: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(y == 0.0, np.nan, x / np.where(y == 0.0, 1.0, y))


ARRAY_OPERATORS: dict[OperationKind, Callable[[Sequence[np.ndarray]], np.ndarray]] = {
    OperationKind.ADD: lambda values: reduce(np.add, values),
    OperationKind.SUBTRACT: lambda values: reduce(np.subtract, values),
    OperationKind.MULTIPLY: lambda values: reduce(np.multiply, values),
    OperationKind.DIVIDE: lambda values: reduce(_safe_divide, values),
}


def _evaluate_node(node: Expression, assignments: Mapping[str, float]) -> float:
    """Recursively evaluate a node."""
    if isinstance(node, Value):
        return node.value

    if isinstance(node, Variable):
        if node.name not in assignments:
            raise UndefinedVariable(node.name)
        return float(assignments[node.name])

    args = [_evaluate_node(child, assignments) for child in node.children]

    if isinstance(node, Operation):
        return OPERATORS[node.kind](args)

    return float(node.apply(args))


def evaluate(expression: Expression, assignments: Mapping[str, float] | None = None) -> float:
    """Evaluate an expression to a single float.

    Args:
        expression: Tree to evaluate
        assignments: Optional variable values; without them the tree must be
            a pure constant

    Returns:
        The value of the expression

    Raises:
        DivisionByZero: If a non-first ``Divide`` child evaluates to 0.0
        UndefinedVariable: If a variable has no assigned value
    """
    return _evaluate_node(expression, assignments or {})


def is_constant(expression: Expression) -> bool:
    """Check whether a subtree contains no variables (or other symbolic nodes) at all."""
    return not any(node.is_symbolic() for node in iter_nodes(expression))


def constant_value(expression: Expression) -> float | None:
    """Value of a pure-constant subtree, or None if it is not one.

    Custom nodes that cannot be evaluated are treated as non-constant.
    ``DivisionByZero`` inside the subtree propagates.
    """
    if not is_constant(expression):
        return None
    try:
        return evaluate(expression)
    except UnsupportedOperation:
        return None


def _evaluate_array_node(node: Expression, assignments: Mapping[str, np.ndarray]) -> np.ndarray:
    if isinstance(node, Value):
        return np.float64(node.value)

    if isinstance(node, Variable):
        if node.name not in assignments:
            raise UndefinedVariable(node.name)
        return np.asarray(assignments[node.name], dtype=float)

    args = [_evaluate_array_node(child, assignments) for child in node.children]

    if isinstance(node, Operation):
        return ARRAY_OPERATORS[node.kind](args)

    return np.asarray(node.apply(args), dtype=float)


def evaluate_array(expression: Expression, assignments: Mapping[str, Any]) -> np.ndarray:
    """Evaluate an expression over arrays of variable values.

    Args:
        expression: Tree to evaluate
        assignments: Variable name to array (or scalar); arrays broadcast

    Returns:
        Array of results; positions dividing by zero are NaN
    """
    with np.errstate(over="ignore", invalid="ignore"):
        result = _evaluate_array_node(expression, assignments)
    return np.asarray(result, dtype=float)
