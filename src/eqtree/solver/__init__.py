"""Equation solving by inverse-operation peeling."""

from eqtree.solver.engine import (
    Solver,
    SolverConfig,
    SolveResult,
    SolveStep,
    solve,
    solve_with_steps,
)
from eqtree.solver.inverse import register_inverse, unregister_inverse
from eqtree.solver.verify import VerificationReport, verify_solution

__all__ = [
    "Solver",
    "SolverConfig",
    "SolveResult",
    "SolveStep",
    "solve",
    "solve_with_steps",
    "register_inverse",
    "unregister_inverse",
    "VerificationReport",
    "verify_solution",
]
