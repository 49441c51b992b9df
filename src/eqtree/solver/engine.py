"""Isolate a variable by peeling inverse operations.

Given ``lhs = rhs`` and a target variable that occurs exactly once, on one
side, along a single path, the solver repeatedly removes the root operation
of the variable's side and applies its inverse to the other side:

    2 * x + 3 = 11
    2 * x = 11.0 - 3.0          (undo Add)
    x = (11.0 - 3.0) / 2.0      (undo Multiply)

Each step peels one layer, so solving terminates after at most
depth-of-tree steps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import logging

from eqtree.errors import (
    AmbiguousVariable,
    MultipleVariableOccurrences,
    SolveError,
    UnsupportedOperation,
    VariableNotFound,
    VerificationFailed,
)
from eqtree.expression.equation import Equation
from eqtree.expression.nodes import Expression, Variable
from eqtree.expression.renderer import render_equation
from eqtree.expression.transform import simplify
from eqtree.solver.inverse import get_inverse_rule
from eqtree.solver.verify import VerificationReport, verify_solution

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the solver.

    Attributes:
        simplify_result: Fold constants in the isolated side after solving
        max_steps: Upper bound on peeled layers before giving up
        verify_samples: Verify the result at this many random points (0 = off)
        seed: Random seed for verification sampling
    """

    simplify_result: bool = False
    max_steps: int = 10_000
    verify_samples: int = 0
    seed: int | None = None


@dataclass
class SolveStep:
    """One peeled layer.

    Attributes:
        operation: Name of the node type that was undone
        index: Position of the child that holds the variable
        equation: Equation after undoing the operation
    """

    operation: str
    index: int
    equation: Equation

    def describe(self) -> str:
        return f"Undo {self.operation} (child {self.index}): {render_equation(self.equation)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "index": self.index,
            "equation": render_equation(self.equation),
        }


@dataclass
class SolveResult:
    """Result of solving an equation.

    Attributes:
        original: Equation as given
        equation: Solved equation ``variable = expression``
        variable: Name of the isolated variable
        steps: Peeled layers in order
        verification: Sampled verification, if requested
    """

    original: Equation
    equation: Equation
    variable: str
    steps: list[SolveStep] = field(default_factory=list)
    verification: VerificationReport | None = None

    @property
    def n_steps(self) -> int:
        return len(self.steps)

    def summary(self) -> str:
        lines = [
            f"Solve for {self.variable}",
            f"  Given:  {render_equation(self.original)}",
        ]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step.describe()}")
        lines.append(f"  Result: {render_equation(self.equation)}")
        if self.verification is not None:
            lines.append(f"  {self.verification.summary()}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "variable": self.variable,
            "original": render_equation(self.original),
            "result": render_equation(self.equation),
            "result_latex": render_equation(self.equation, latex=True),
            "steps": [step.to_dict() for step in self.steps],
            "verification": self.verification.to_dict() if self.verification else None,
        }


class Solver:
    """Rearranges equations to isolate a single variable.

    Only variables that occur once, on one side, are supported; there is no
    collection of like terms.
    """

    def __init__(self, config: SolverConfig | None = None) -> None:
        self.config = config or SolverConfig()

    def solve(self, equation: Equation, variable: str) -> Equation:
        """Solve ``equation`` for ``variable``.

        Args:
            equation: Equation to rearrange
            variable: Name of the variable to isolate

        Returns:
            New equation ``Variable(variable) = expression``

        Raises:
            VariableNotFound: If neither side contains the variable
            AmbiguousVariable: If both sides contain it
            MultipleVariableOccurrences: If it occurs in more than one child of a node
            UnsupportedOperation: If its path crosses a node with no inverse rule
            DivisionByZero: If undoing an operation would divide by zero
        """
        return self.solve_with_steps(equation, variable).equation

    def solve_with_steps(self, equation: Equation, variable: str) -> SolveResult:
        """Solve and record every intermediate equation."""
        side, other = self._orient(equation, variable)

        if isinstance(side, Variable) and side is equation.lhs:
            logger.debug(f"{render_equation(equation)} is already solved for {variable}")
            return self._finish(equation, equation, variable, [])

        steps: list[SolveStep] = []
        while not isinstance(side, Variable):
            if len(steps) >= self.config.max_steps:
                raise SolveError(f"Gave up after {self.config.max_steps} steps")

            index, other = self._peel(side, other, variable)
            operation = type(side).__name__
            side = side.children[index]

            step = SolveStep(operation=operation, index=index, equation=Equation(side, other))
            steps.append(step)
            logger.debug(step.describe())

        if self.config.simplify_result:
            other = simplify(other)

        return self._finish(equation, Equation(side, other), variable, steps)

    def _orient(self, equation: Equation, variable: str) -> tuple[Expression, Expression]:
        """Return (side holding the variable, other side)."""
        in_lhs = equation.lhs.contains_variable(variable)
        in_rhs = equation.rhs.contains_variable(variable)

        if in_lhs and in_rhs:
            raise AmbiguousVariable(f"Variable '{variable}' appears on both sides of the equation")
        if in_lhs:
            return equation.lhs, equation.rhs
        if in_rhs:
            return equation.rhs, equation.lhs
        raise VariableNotFound(f"Variable '{variable}' does not appear in the equation")

    def _peel(self, node: Expression, other: Expression, variable: str) -> tuple[int, Expression]:
        """Undo ``node``; return the followed child index and the new other side."""
        rule = get_inverse_rule(node)
        if rule is None or node.is_leaf():
            raise UnsupportedOperation(
                f"Cannot isolate '{variable}' through {type(node).__name__}: no inverse rule"
            )

        holders = [i for i, child in enumerate(node.children) if child.contains_variable(variable)]
        if not holders:
            raise UnsupportedOperation(
                f"{type(node).__name__} reports '{variable}' but none of its operands contain it"
            )
        if len(holders) > 1:
            raise MultipleVariableOccurrences(
                f"Variable '{variable}' occurs in {len(holders)} operands of {type(node).__name__}"
            )

        index = holders[0]
        return index, rule(node, index, other)

    def _finish(
        self,
        original: Equation,
        solved: Equation,
        variable: str,
        steps: list[SolveStep],
    ) -> SolveResult:
        result = SolveResult(original=original, equation=solved, variable=variable, steps=steps)

        if self.config.verify_samples > 0:
            report = verify_solution(
                original,
                solved,
                variable,
                n_samples=self.config.verify_samples,
                seed=self.config.seed,
            )
            result.verification = report
            if not report.passed:
                raise VerificationFailed(
                    f"{render_equation(solved)} does not satisfy {render_equation(original)}: "
                    f"{report.summary()}"
                )

        logger.debug(f"Solved for {variable} in {len(steps)} steps: {render_equation(solved)}")
        return result


# =============================================================================
# Default solver - shared by the convenience functions
# =============================================================================

_SOLVER: Solver | None = None


def get_solver() -> Solver:
    """Get the default solver instance."""
    global _SOLVER
    if _SOLVER is None:
        _SOLVER = Solver()
    return _SOLVER


def solve(equation: Equation, variable: str, config: SolverConfig | None = None) -> Equation:
    """Convenience function to solve with the default (or a configured) solver."""
    solver = Solver(config) if config is not None else get_solver()
    return solver.solve(equation, variable)


def solve_with_steps(
    equation: Equation,
    variable: str,
    config: SolverConfig | None = None,
) -> SolveResult:
    """Convenience function returning the full ``SolveResult``."""
    solver = Solver(config) if config is not None else get_solver()
    return solver.solve_with_steps(equation, variable)
