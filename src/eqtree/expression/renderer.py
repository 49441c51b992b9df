"""Render expression trees as infix text or LaTeX.

Rendering is pure and total: every tree, including ones holding NaN or
infinite constants and custom node types, produces a string.

Parenthesisation is minimal. A child is wrapped when it is an interior node
binding strictly looser than its parent, or when it binds equally tightly
but sits after the first operand of ``-`` or ``/``::

    Multiply([Add([1, 2]), 3])       ->  "(1.0 + 2.0) * 3.0"
    Subtract([20, Add([a, b])])      ->  "20.0 - (a + b)"
    Multiply([2, Divide([x, 3])])    ->  "2.0 * x / 3.0"

so the parser always rebuilds an equivalent tree from the text.
"""

from __future__ import annotations

from typing import Callable

from eqtree.expression.nodes import Divide, Expression, Operation
from eqtree.expression.equation import Equation


def needs_parentheses(child: Expression, parent: Expression, index: int = 0) -> bool:
    """Check whether ``child``, the ``index``-th operand of ``parent``, must be wrapped."""
    if not child.children:
        return False
    if child.precedence < parent.precedence:
        return True
    # a - (b + c) and a / (b * c) lose their grouping without parentheses
    return (
        index > 0
        and child.precedence == parent.precedence
        and isinstance(parent, Operation)
        and not parent.kind.spec.commutative
    )


def _render_tree(
    node: Expression,
    emit: Callable[[Expression, list[str]], str],
    wrap: Callable[[str], str],
    groups_children: Callable[[Expression], bool],
) -> str:
    """Render children first, then hand their text to ``emit``."""
    rendered = []
    for index, child in enumerate(node.children):
        text = _render_tree(child, emit, wrap, groups_children)
        if not groups_children(node) and needs_parentheses(child, node, index):
            text = wrap(text)
        rendered.append(text)
    return emit(node, rendered)


def render(expression: Expression) -> str:
    """Render an expression as infix text.

    Args:
        expression: Root of the tree to render

    Returns:
        Deterministic infix string, e.g. ``"2.0 * x"``
    """
    return _render_tree(
        expression,
        emit=lambda node, children: node.render(children),
        wrap=lambda text: f"({text})",
        groups_children=lambda node: False,
    )


def render_latex(expression: Expression) -> str:
    """Render an expression as LaTeX math (without surrounding ``$``)."""
    return _render_tree(
        expression,
        emit=lambda node, children: node.render_latex(children),
        wrap=lambda text: f"\\left({text}\\right)",
        # \frac already groups numerator and denominator
        groups_children=lambda node: isinstance(node, Divide),
    )


def render_equation(equation: Equation, latex: bool = False) -> str:
    """Render ``lhs = rhs``."""
    fmt = render_latex if latex else render
    return f"{fmt(equation.lhs)} = {fmt(equation.rhs)}"
