"""Expression tree representation, rendering and parsing."""

from eqtree.expression.types import OperationKind, OperationSpec
from eqtree.expression.nodes import (
    Expression,
    Term,
    Value,
    Variable,
    Operation,
    Add,
    Subtract,
    Multiply,
    Divide,
    contains_variable,
    variables,
)
from eqtree.expression.equation import Equation
from eqtree.expression.evaluator import evaluate, evaluate_array, is_constant
from eqtree.expression.renderer import render, render_latex, render_equation
from eqtree.expression.parser import parse_expression, parse_equation
from eqtree.expression.transform import (
    simplify,
    expand,
    substitute,
    compare_structure,
    collect_summations,
    get_coefficient,
)

__all__ = [
    "OperationKind",
    "OperationSpec",
    "Expression",
    "Term",
    "Value",
    "Variable",
    "Operation",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "contains_variable",
    "variables",
    "Equation",
    "evaluate",
    "evaluate_array",
    "is_constant",
    "render",
    "render_latex",
    "render_equation",
    "parse_expression",
    "parse_equation",
    "simplify",
    "substitute",
    "compare_structure",
    "expand",
    "collect_summations",
    "get_coefficient",
]
