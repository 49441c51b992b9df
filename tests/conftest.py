"""
Pytest fixtures for eqtree tests.

Provides common variables and a few custom node types that exercise the
extension points (rendering, evaluation, inverse rules).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import pytest

from eqtree.expression.nodes import Expression, Multiply, Value, Variable
from eqtree.solver.inverse import register_inverse, unregister_inverse


@dataclass(frozen=True)
class Negate(Expression):
    """Unary minus implemented outside the core node set."""

    operand: Expression

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.operand,)

    @property
    def precedence(self) -> int:
        return 3

    def render(self, rendered_children: Sequence[str]) -> str:
        return f"-{rendered_children[0]}"

    def contains_variable(self, name: str) -> bool:
        return self.operand.contains_variable(name)

    def apply(self, values):
        return -values[0]

    def with_children(self, children) -> "Negate":
        (operand,) = children
        return Negate(operand)


@dataclass(frozen=True)
class Absolute(Expression):
    """Custom operation with no inverse rule."""

    operand: Expression

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def render(self, rendered_children: Sequence[str]) -> str:
        return f"|{rendered_children[0]}|"

    def contains_variable(self, name: str) -> bool:
        return self.operand.contains_variable(name)

    def apply(self, values):
        return abs(values[0])


@dataclass(frozen=True)
class NamedConstant(Expression):
    """Custom leaf such as pi."""

    name: str
    value: float

    def render(self, rendered_children: Sequence[str]) -> str:
        return self.name

    def render_latex(self, rendered_children: Sequence[str]) -> str:
        return f"\\{self.name}"

    def contains_variable(self, name: str) -> bool:
        return False

    def apply(self, values):
        return self.value


@dataclass(frozen=True)
class Opaque(Expression):
    """Custom leaf that claims to mention a variable but cannot be inverted."""

    name: str

    def render(self, rendered_children: Sequence[str]) -> str:
        return f"opaque({self.name})"

    def contains_variable(self, name: str) -> bool:
        return self.name == name

    def is_symbolic(self) -> bool:
        return True


@dataclass(frozen=True)
class Tagged(Expression):
    """Wrapper whose tag counts as a variable mention of its own."""

    operand: Expression
    tag: str

    @property
    def children(self) -> tuple[Expression, ...]:
        return (self.operand,)

    def render(self, rendered_children: Sequence[str]) -> str:
        return f"{rendered_children[0]}[{self.tag}]"

    def contains_variable(self, name: str) -> bool:
        return self.tag == name or self.operand.contains_variable(name)

    def is_symbolic(self) -> bool:
        return True


def invert_negate(node: Expression, index: int, other: Expression) -> Expression:
    return Multiply([Value(-1.0), other])


@pytest.fixture
def x() -> Variable:
    return Variable("x")


@pytest.fixture
def y() -> Variable:
    return Variable("y")


@pytest.fixture
def negate_rule():
    """Register the Negate inverse rule for the duration of a test."""
    register_inverse(Negate, invert_negate)
    yield invert_negate
    unregister_inverse(Negate)
