"""Equation: two expressions asserted equal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eqtree.expression.nodes import Expression, as_expression, variables


@dataclass(frozen=True)
class Equation:
    """An equation ``lhs = rhs``.

    Attributes:
        lhs: Left-hand side expression
        rhs: Right-hand side expression
    """

    lhs: Expression
    rhs: Expression

    def __post_init__(self) -> None:
        object.__setattr__(self, "lhs", as_expression(self.lhs))
        object.__setattr__(self, "rhs", as_expression(self.rhs))

    def contains_variable(self, name: str) -> bool:
        """Check whether either side mentions ``name``."""
        return self.lhs.contains_variable(name) or self.rhs.contains_variable(name)

    def variables(self) -> list[str]:
        """Variable names on both sides, left side first."""
        names = variables(self.lhs)
        names.extend(n for n in variables(self.rhs) if n not in names)
        return names

    def swapped(self) -> Equation:
        """Same equation with the sides exchanged."""
        return Equation(self.rhs, self.lhs)

    def to_dict(self, latex: bool = False) -> dict[str, Any]:
        from eqtree.expression.renderer import render, render_latex

        fmt = render_latex if latex else render
        return {
            "lhs": fmt(self.lhs),
            "rhs": fmt(self.rhs),
            "equation": f"{fmt(self.lhs)} = {fmt(self.rhs)}",
        }

    def __str__(self) -> str:
        from eqtree.expression.renderer import render_equation

        return render_equation(self)
