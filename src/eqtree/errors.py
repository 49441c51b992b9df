"""Error types raised by eqtree.

Every failure is surfaced to the caller as a typed exception. Nothing is
retried or recovered inside the library.
"""


class EquationError(Exception):
    """Base class for all eqtree errors."""

    pass


class InvalidArity(EquationError, ValueError):
    """Raised when an operation node is constructed with no children."""

    pass


class ParseError(EquationError, ValueError):
    """Raised when infix text cannot be turned into an expression tree."""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)
        self.position = position


class DivisionByZero(EquationError, ZeroDivisionError):
    """Raised when evaluating or solving divides by exactly 0.0."""

    pass


class UndefinedVariable(EquationError):
    """Raised when evaluation reaches a variable with no known value."""

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class SolveError(EquationError):
    """Base class for failures while isolating a variable."""

    pass


class VariableNotFound(SolveError):
    """Raised when the target variable appears on neither side."""

    pass


class AmbiguousVariable(SolveError):
    """Raised when the target variable appears on both sides."""

    pass


class MultipleVariableOccurrences(SolveError):
    """Raised when more than one child of a node contains the target."""

    pass


class UnsupportedOperation(SolveError):
    """Raised when a node on the variable's path has no inverse rule."""

    pass


class VerificationFailed(SolveError):
    """Raised when a solution does not reproduce the original equation."""

    pass
