"""Parse infix text into expression trees.

Uses the shunting-yard algorithm with standard precedence (``*`` and ``/``
bind tighter than ``+`` and ``-``) and left associativity. Chains of the
same operator become one n-ary node::

    "a - b - c"    -> Subtract([a, b, c])
    "2 * (x + 1)"  -> Multiply([2.0, Add([x, 1.0])])

Braces wrap atoms the plain grammar cannot express: ``{-1}`` is a negative
constant and ``{v 1}`` a variable named ``v 1``.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from eqtree.errors import ParseError
from eqtree.expression.equation import Equation
from eqtree.expression.nodes import (
    OPERATION_TYPES,
    Expression,
    Value,
    Variable,
)
from eqtree.expression.types import OperationKind, get_kind_for_symbol


_TOKEN_RE = re.compile(
    r"""
      (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
    | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
    | (?P<braced>\{[^{}]*\})
    | (?P<op>[-+*/])
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<space>\s+)
    """,
    re.VERBOSE,
)

_OPERAND_TOKENS = frozenset({"number", "name", "braced"})

# Unary minus binds tighter than any binary operator
_NEGATE_PRECEDENCE = 3


@dataclass(frozen=True)
class Token:
    """A lexical token and where it starts in the source text."""

    kind: str
    text: str
    position: int

    @property
    def precedence(self) -> int:
        if self.kind == "negate":
            return _NEGATE_PRECEDENCE
        return get_kind_for_symbol(self.text).precedence


def tokenize(text: str, offset: int = 0) -> list[Token]:
    """Split infix text into tokens, dropping whitespace."""
    tokens = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ParseError(f"Unexpected character {text[pos]!r}", pos + offset)
        if match.lastgroup != "space":
            tokens.append(Token(match.lastgroup, match.group(), pos + offset))
        pos = match.end()
    return tokens


def _make_operand(token: Token) -> Expression:
    if token.kind == "number":
        return Value(float(token.text))
    if token.kind == "name":
        return Variable(token.text)

    inner = token.text[1:-1].strip()
    if not inner:
        raise ParseError("Empty braces", token.position)
    try:
        return Value(float(inner))
    except ValueError:
        return Variable(inner)


def _combine(kind: OperationKind, left: Expression, right: Expression) -> Expression:
    """Build ``left <op> right``, merging same-kind chains into one node."""
    cls = OPERATION_TYPES[kind]
    children = list(left.children) if type(left) is cls else [left]
    if kind.spec.commutative and type(right) is cls:
        children.extend(right.children)
    else:
        children.append(right)
    return cls(children)


def _reduce(operands: list[Expression], token: Token) -> None:
    """Apply one operator token to the operand stack."""
    if token.kind == "negate":
        operand = operands.pop()
        operands.append(_combine(OperationKind.MULTIPLY, Value(-1.0), operand))
        return
    right = operands.pop()
    left = operands.pop()
    operands.append(_combine(get_kind_for_symbol(token.text), left, right))


def _parse(text: str, offset: int = 0) -> Expression:
    tokens = tokenize(text, offset)
    if not tokens:
        raise ParseError("Empty expression", offset)

    operands: list[Expression] = []
    operators: list[Token] = []
    expect_operand = True

    for token in tokens:
        if token.kind in _OPERAND_TOKENS:
            if not expect_operand:
                raise ParseError(f"Expected an operator before {token.text!r}", token.position)
            operand = _make_operand(token)
            # "-2" is a negative constant, not -1 * 2
            if isinstance(operand, Value) and operators and operators[-1].kind == "negate":
                operators.pop()
                operand = Value(-operand.value)
            operands.append(operand)
            expect_operand = False

        elif token.kind == "op":
            if expect_operand:
                if token.text == "-":
                    operators.append(Token("negate", token.text, token.position))
                    continue
                if token.text == "+":
                    continue
                raise ParseError(f"Expected an operand before {token.text!r}", token.position)
            while (
                operators
                and operators[-1].kind != "lparen"
                and operators[-1].precedence >= token.precedence
            ):
                _reduce(operands, operators.pop())
            operators.append(token)
            expect_operand = True

        elif token.kind == "lparen":
            if not expect_operand:
                raise ParseError("Expected an operator before '('", token.position)
            operators.append(token)

        else:
            if expect_operand:
                raise ParseError("Expected an operand before ')'", token.position)
            while operators and operators[-1].kind != "lparen":
                _reduce(operands, operators.pop())
            if not operators:
                raise ParseError("Mismatched parentheses", token.position)
            operators.pop()

    if expect_operand:
        raise ParseError("Unexpected end of expression", offset + len(text))

    while operators:
        token = operators.pop()
        if token.kind == "lparen":
            raise ParseError("Mismatched parentheses", token.position)
        _reduce(operands, token)

    return operands[0]


def parse_expression(text: str) -> Expression:
    """Parse an infix expression such as ``"2 * x + 3"``.

    Raises:
        ParseError: If the text is not a well-formed expression
    """
    return _parse(text)


def parse_equation(text: str) -> Equation:
    """Parse an equation such as ``"2 * x + 3 = 11"``.

    Raises:
        ParseError: If there is not exactly one ``=`` or either side is malformed
    """
    parts = text.split("=")
    if len(parts) != 2:
        if len(parts) == 1:
            raise ParseError("Equation must contain '='")
        second = text.index("=", text.index("=") + 1)
        raise ParseError("Equation must contain exactly one '='", second)
    lhs_text, rhs_text = parts
    return Equation(_parse(lhs_text), _parse(rhs_text, offset=len(lhs_text) + 1))
