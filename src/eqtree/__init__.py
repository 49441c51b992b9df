"""
eqtree: Algebraic expression trees with rendering and equation rearrangement.

Build expressions from values, variables and n-ary operations, render them
as infix text or LaTeX, and isolate a variable by undoing one operation at
a time:

    >>> from eqtree import Add, Equation, Value, Variable, solve
    >>> solved = solve(Equation(Add([Variable("x"), Value(3.0)]), Value(10.0)), "x")
    >>> str(solved)
    'x = 10.0 - 3.0'
"""

__version__ = "0.1.0"

from eqtree.errors import (
    EquationError,
    InvalidArity,
    ParseError,
    DivisionByZero,
    UndefinedVariable,
    SolveError,
    VariableNotFound,
    AmbiguousVariable,
    MultipleVariableOccurrences,
    UnsupportedOperation,
    VerificationFailed,
)
from eqtree.expression import (
    Expression,
    Term,
    Value,
    Variable,
    Operation,
    Add,
    Subtract,
    Multiply,
    Divide,
    Equation,
    evaluate,
    render,
    render_latex,
    parse_expression,
    parse_equation,
    simplify,
    expand,
    substitute,
)
from eqtree.solver import (
    Solver,
    SolverConfig,
    SolveResult,
    solve,
    register_inverse,
    verify_solution,
)

__all__ = [
    "__version__",
    "EquationError",
    "InvalidArity",
    "ParseError",
    "DivisionByZero",
    "UndefinedVariable",
    "SolveError",
    "VariableNotFound",
    "AmbiguousVariable",
    "MultipleVariableOccurrences",
    "UnsupportedOperation",
    "VerificationFailed",
    "Expression",
    "Term",
    "Value",
    "Variable",
    "Operation",
    "Add",
    "Subtract",
    "Multiply",
    "Divide",
    "Equation",
    "evaluate",
    "render",
    "render_latex",
    "parse_expression",
    "parse_equation",
    "simplify",
    "expand",
    "substitute",
    "Solver",
    "SolverConfig",
    "SolveResult",
    "solve",
    "register_inverse",
    "verify_solution",
]
