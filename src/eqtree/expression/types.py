"""Operation kinds and their notation.

Defines the symbol, precedence and algebraic properties of every
built-in operation so that rendering, parsing and simplification agree.
"""

from enum import Enum, auto
from dataclasses import dataclass


class OperationKind(Enum):
    """Built-in operation kinds."""

    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()

    @property
    def spec(self) -> "OperationSpec":
        return OPERATION_SPECS[self]

    @property
    def symbol(self) -> str:
        return self.spec.symbol

    @property
    def precedence(self) -> int:
        return self.spec.precedence


@dataclass(frozen=True)
class OperationSpec:
    """Notation and properties of an operation.

    Attributes:
        symbol: Infix operator symbol
        precedence: Binding strength (higher binds tighter)
        latex: LaTeX joiner used between operands
        commutative: Whether operand order is irrelevant to the value
        identity: Neutral element for non-first operands
    """

    symbol: str
    precedence: int
    latex: str
    commutative: bool
    identity: float

    def __post_init__(self) -> None:
        if self.precedence >= ATOM_PRECEDENCE:
            raise ValueError(
                f"Operation precedence ({self.precedence}) must be below atoms ({ATOM_PRECEDENCE})"
            )


# Leaves and custom atoms never need parentheses
ATOM_PRECEDENCE = 100

ADDITIVE_PRECEDENCE = 1
MULTIPLICATIVE_PRECEDENCE = 2


OPERATION_SPECS: dict[OperationKind, OperationSpec] = {
    OperationKind.ADD: OperationSpec("+", ADDITIVE_PRECEDENCE, " + ", True, 0.0),
    OperationKind.SUBTRACT: OperationSpec("-", ADDITIVE_PRECEDENCE, " - ", False, 0.0),
    OperationKind.MULTIPLY: OperationSpec("*", MULTIPLICATIVE_PRECEDENCE, " \\cdot ", True, 1.0),
    OperationKind.DIVIDE: OperationSpec("/", MULTIPLICATIVE_PRECEDENCE, " / ", False, 1.0),
}


SYMBOL_TO_KIND: dict[str, OperationKind] = {
    spec.symbol: kind for kind, spec in OPERATION_SPECS.items()
}


def get_kind_for_symbol(symbol: str) -> OperationKind:
    """Look up the operation kind for an infix symbol."""
    try:
        return SYMBOL_TO_KIND[symbol]
    except KeyError:
        raise ValueError(f"Unknown operator symbol: {symbol}") from None
