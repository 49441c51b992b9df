"""Expression tree nodes.

Implements the node types of an algebraic expression:
- Expression: Capability base class every node (built-in or custom) implements
- Value: Constant double-precision number
- Variable: Named unknown, compared by name
- Add / Subtract / Multiply / Divide: n-ary operations over ordered children

All nodes are frozen; transformations always build new trees.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, Sequence
import math
import numbers

from eqtree.errors import InvalidArity, UnsupportedOperation
from eqtree.expression.types import ATOM_PRECEDENCE, OperationKind


class Expression(ABC):
    """Capability contract for anything that can live in an expression tree.

    Custom leaf or node types subclass this to take part in rendering and
    containment checks next to the built-in nodes. Solving through a custom
    node additionally needs an inverse rule (see ``eqtree.solver.inverse``).
    """

    # Interior nodes override this with their ordered operands
    children: tuple[Expression, ...] = ()

    @property
    def precedence(self) -> int:
        """Binding strength used to decide parenthesisation."""
        return ATOM_PRECEDENCE

    @abstractmethod
    def render(self, rendered_children: Sequence[str]) -> str:
        """Build this node's infix text from its already rendered children."""
        pass

    def render_latex(self, rendered_children: Sequence[str]) -> str:
        """Build this node's LaTeX text. Defaults to the infix form."""
        return self.render(rendered_children)

    @abstractmethod
    def contains_variable(self, name: str) -> bool:
        """Check whether a variable called ``name`` occurs in this subtree."""
        pass

    def apply(self, values: Sequence[Any]) -> Any:
        """Combine evaluated children into this node's value."""
        raise UnsupportedOperation(
            f"{type(self).__name__} does not support numeric evaluation"
        )

    def is_symbolic(self) -> bool:
        """Whether this node by itself, ignoring its children, stands for an unknown.

        ``is_constant`` and constant folding treat a subtree as a number only
        when no node in it is symbolic. Custom leaves that report variables
        through ``contains_variable`` should return True here as well.
        """
        return False

    def is_leaf(self) -> bool:
        return not self.children

    # Operator sugar

    def __add__(self, other: Any) -> Add:
        return Add([self, as_expression(other)])

    def __radd__(self, other: Any) -> Add:
        return Add([as_expression(other), self])

    def __sub__(self, other: Any) -> Subtract:
        return Subtract([self, as_expression(other)])

    def __rsub__(self, other: Any) -> Subtract:
        return Subtract([as_expression(other), self])

    def __mul__(self, other: Any) -> Multiply:
        return Multiply([self, as_expression(other)])

    def __rmul__(self, other: Any) -> Multiply:
        return Multiply([as_expression(other), self])

    def __truediv__(self, other: Any) -> Divide:
        return Divide([self, as_expression(other)])

    def __rtruediv__(self, other: Any) -> Divide:
        return Divide([as_expression(other), self])

    def __neg__(self) -> Multiply:
        return Multiply([Value(-1.0), self])

    def __str__(self) -> str:
        from eqtree.expression.renderer import render

        return render(self)


class Term(Expression):
    """Leaf expression: a constant or a variable."""

    def render(self, rendered_children: Sequence[str] = ()) -> str:
        return self.to_string()

    @abstractmethod
    def to_string(self) -> str:
        pass


@dataclass(frozen=True, eq=True, repr=True)
class Value(Term):
    """Constant double-precision value.

    Non-finite values are accepted; arithmetic on them follows IEEE 754.
    """

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, numbers.Real):
            raise TypeError(f"Value must be a real number, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))

    def to_string(self) -> str:
        return repr(self.value)

    def render_latex(self, rendered_children: Sequence[str] = ()) -> str:
        if math.isnan(self.value):
            return "\\mathrm{NaN}"
        if math.isinf(self.value):
            return "\\infty" if self.value > 0 else "-\\infty"
        return self.to_string()

    def contains_variable(self, name: str) -> bool:
        return False

    def apply(self, values: Sequence[Any]) -> float:
        return self.value

    __str__ = to_string


@dataclass(frozen=True, eq=True, repr=True)
class Variable(Term):
    """Named unknown. Two variables are the same when their names match."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Variable name must be a string, got {type(self.name).__name__}")
        if not self.name:
            raise ValueError("Variable name must not be empty")

    def to_string(self) -> str:
        return self.name

    def contains_variable(self, name: str) -> bool:
        return self.name == name

    def is_symbolic(self) -> bool:
        return True

    __str__ = to_string


@dataclass(frozen=True, eq=True, repr=True)
class Operation(Expression):
    """Operation node over an ordered, non-empty tuple of children.

    The first child is the base for non-commutative kinds:
    ``Subtract([a, b, c])`` is ``a - b - c`` and ``Divide([a, b, c])`` is
    ``a / b / c``.
    """

    kind: ClassVar[OperationKind]

    children: tuple[Expression, ...] = ()

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if not children:
            raise InvalidArity(f"{type(self).__name__} requires at least one child")
        for child in children:
            if not isinstance(child, Expression):
                raise TypeError(
                    f"{type(self).__name__} children must be expressions, got {type(child).__name__}"
                )
        object.__setattr__(self, "children", children)

    @property
    def precedence(self) -> int:
        return self.kind.precedence

    @property
    def arity(self) -> int:
        return len(self.children)

    def render(self, rendered_children: Sequence[str]) -> str:
        return f" {self.kind.symbol} ".join(rendered_children)

    def render_latex(self, rendered_children: Sequence[str]) -> str:
        return self.kind.spec.latex.join(rendered_children)

    def contains_variable(self, name: str) -> bool:
        return any(child.contains_variable(name) for child in self.children)

    def with_children(self, children: Iterable[Expression]) -> Operation:
        """Create a node of the same kind with different children."""
        return type(self)(tuple(children))


class Add(Operation):
    kind = OperationKind.ADD


class Subtract(Operation):
    kind = OperationKind.SUBTRACT


class Multiply(Operation):
    kind = OperationKind.MULTIPLY


class Divide(Operation):
    kind = OperationKind.DIVIDE

    def render_latex(self, rendered_children: Sequence[str]) -> str:
        # a / b / c nests as \frac{\frac{a}{b}}{c}
        result = rendered_children[0]
        for divisor in rendered_children[1:]:
            result = f"\\frac{{{result}}}{{{divisor}}}"
        return result


OPERATION_TYPES: dict[OperationKind, type[Operation]] = {
    OperationKind.ADD: Add,
    OperationKind.SUBTRACT: Subtract,
    OperationKind.MULTIPLY: Multiply,
    OperationKind.DIVIDE: Divide,
}


def make_operation(kind: OperationKind, children: Iterable[Expression]) -> Operation:
    """Build an operation node from its kind and children."""
    return OPERATION_TYPES[kind](tuple(children))


def as_expression(value: Any) -> Expression:
    """Wrap plain numbers in ``Value``; pass expressions through."""
    if isinstance(value, Expression):
        return value
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return Value(value)
    raise TypeError(f"Cannot use {type(value).__name__} as an expression")


def contains_variable(node: Expression, name: str) -> bool:
    """Check whether ``name`` occurs anywhere in a subtree."""
    return node.contains_variable(name)


def count_nodes(node: Expression) -> int:
    """Count total nodes in a subtree."""
    return 1 + sum(count_nodes(c) for c in node.children)


def get_depth(node: Expression) -> int:
    """Get the depth of a subtree."""
    if node.children:
        return 1 + max(get_depth(c) for c in node.children)
    return 1


def iter_nodes(node: Expression) -> Iterator[Expression]:
    """Yield all nodes in a subtree (pre-order traversal)."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def collect_nodes(node: Expression) -> list[Expression]:
    """Collect all nodes in a subtree (pre-order traversal)."""
    return list(iter_nodes(node))


def variables(node: Expression) -> list[str]:
    """Names of all variables in a subtree, in first-seen order."""
    seen: dict[str, None] = {}
    for current in iter_nodes(node):
        if isinstance(current, Variable):
            seen.setdefault(current.name, None)
    return list(seen)
