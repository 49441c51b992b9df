"""Example: Building, rendering and rearranging equations.

This example walks through the main pieces of eqtree:
- Building expression trees directly and by parsing text
- Rendering as infix text and LaTeX
- Solving for a variable with recorded steps
- Verifying a solution numerically
- Teaching the solver a custom operation
"""

from dataclasses import dataclass

from eqtree import (
    Add,
    Equation,
    Expression,
    Multiply,
    Solver,
    SolverConfig,
    Value,
    Variable,
    parse_equation,
    register_inverse,
    render,
    render_latex,
    simplify,
    solve,
)
from eqtree.expression import render_equation


@dataclass(frozen=True)
class Negate(Expression):
    """Unary minus as a custom node."""

    operand: Expression

    @property
    def children(self):
        return (self.operand,)

    @property
    def precedence(self):
        return 3

    def render(self, rendered_children):
        return f"-{rendered_children[0]}"

    def contains_variable(self, name):
        return self.operand.contains_variable(name)

    def apply(self, values):
        return -values[0]


def main():
    """Run the eqtree walkthrough."""
    print("=" * 60)
    print("eqtree walkthrough")
    print("=" * 60)

    # =========================================================================
    # Step 1: Build and render
    # =========================================================================
    print("\n[Step 1] Building expressions...")

    x = Variable("x")
    expr = Multiply([Add([Value(1.0), x]), Value(3.0)])
    print(f"Infix: {render(expr)}")
    print(f"LaTeX: {render_latex(expr)}")

    # =========================================================================
    # Step 2: Solve
    # =========================================================================
    print("\n[Step 2] Solving x + 3 = 10...")

    solved = solve(Equation(Add([x, Value(3.0)]), Value(10.0)), "x")
    print(solved)
    print(f"Simplified: x = {render(simplify(solved.rhs))}")

    # =========================================================================
    # Step 3: Steps and verification
    # =========================================================================
    print("\n[Step 3] Solving a parsed equation with verification...")

    solver = Solver(SolverConfig(verify_samples=32, seed=42))
    result = solver.solve_with_steps(parse_equation("(a * x - b) / c = d"), "x")
    print(result.summary())

    # =========================================================================
    # Step 4: Custom operation
    # =========================================================================
    print("\n[Step 4] Solving through a custom node...")

    register_inverse(Negate, lambda node, index, other: Multiply([Value(-1.0), other]))
    solved = solve(Equation(Negate(Add([x, Value(1.0)])), Value(4.0)), "x")
    print(render_equation(solved))

    print("\n" + "=" * 60)
    print("Done")
    print("=" * 60)


if __name__ == "__main__":
    main()
