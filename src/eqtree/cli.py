"""
Command-line interface for eqtree.

Provides commands for:
- Rendering expressions as infix text or LaTeX
- Evaluating and simplifying expressions
- Solving equations for a variable, with optional steps and verification
"""

import json
import logging
import sys
from pathlib import Path

import click

from eqtree import __version__

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("eqtree")


def _parse_assignment(raw: str) -> tuple[str, float]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected NAME=VALUE, got '{raw}'")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise click.BadParameter(f"Value for '{name.strip()}' is not a number: '{value}'") from None


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """eqtree - Expression trees and equation rearrangement."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.argument("expression")
@click.option("--latex", is_flag=True, help="Render as LaTeX")
def render(expression: str, latex: bool) -> None:
    """Parse an expression and print its canonical form.

    Put -- before an expression that starts with a minus sign:

    \b
        eqtree render -- "-x + 1"
    """
    from eqtree.errors import EquationError
    from eqtree.expression import parse_expression, render as render_text, render_latex

    try:
        tree = parse_expression(expression)
    except EquationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(render_latex(tree) if latex else render_text(tree))


@main.command()
@click.argument("expression")
@click.option(
    "--assign",
    "-a",
    multiple=True,
    help="Variable value as NAME=VALUE (repeatable)",
)
def evaluate(expression: str, assign: tuple[str, ...]) -> None:
    """Evaluate an expression numerically.

    Put -- before an expression that starts with a minus sign, after any options:

    \b
        eqtree evaluate -a x=2 -- "-x + 1"
    """
    from eqtree.errors import EquationError
    from eqtree.expression import evaluate as evaluate_tree, parse_expression

    assignments = dict(_parse_assignment(raw) for raw in assign)

    try:
        value = evaluate_tree(parse_expression(expression), assignments)
    except EquationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(repr(value))


@main.command()
@click.argument("expression")
def simplify(expression: str) -> None:
    """Fold constants and drop identities in an expression.

    Put -- before an expression that starts with a minus sign:

    \b
        eqtree simplify -- "-x * 1"
    """
    from eqtree.errors import EquationError
    from eqtree.expression import parse_expression, render as render_text, simplify as simplify_tree

    try:
        tree = simplify_tree(parse_expression(expression))
    except EquationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(render_text(tree))


@main.command()
@click.argument("equation")
@click.argument("variable")
@click.option("--simplify/--no-simplify", "simplify_result", default=False, help="Simplify the result")
@click.option("--steps", is_flag=True, help="Show every rearrangement step")
@click.option("--latex", is_flag=True, help="Print the result as LaTeX")
@click.option("--verify", "verify_samples", default=0, help="Verify at N random points")
@click.option("--seed", default=None, type=int, help="Random seed for verification")
@click.option("--output", "-o", default=None, help="Output file for results (JSON)")
def solve(
    equation: str,
    variable: str,
    simplify_result: bool,
    steps: bool,
    latex: bool,
    verify_samples: int,
    seed: int | None,
    output: str | None,
) -> None:
    """Solve EQUATION for VARIABLE, e.g. eqtree solve "2*x + 3 = 11" x.

    Put -- before an equation that starts with a minus sign:

    \b
        eqtree solve -- "-x = 4" x
    """
    from eqtree.errors import EquationError
    from eqtree.expression import parse_equation, render_equation
    from eqtree.solver import Solver, SolverConfig

    logger.debug(f"Solving '{equation}' for {variable}")

    config = SolverConfig(
        simplify_result=simplify_result,
        verify_samples=verify_samples,
        seed=seed,
    )

    try:
        parsed = parse_equation(equation)
        result = Solver(config).solve_with_steps(parsed, variable)
    except EquationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if steps:
        click.echo(result.summary())
    else:
        click.echo(render_equation(result.equation, latex=latex))
        if result.verification is not None:
            click.echo(result.verification.summary())

    # Save if output specified
    if output:
        output_path = Path(output)
        output_path.write_text(json.dumps(result.to_dict(), indent=2))
        click.echo(f"\nResults saved to {output}")


@main.command()
def info() -> None:
    """Show eqtree installation info."""
    from importlib.metadata import version

    import numpy as np

    click.echo(f"eqtree v{__version__}\n")
    click.echo("Dependencies:")
    click.echo(f"  numpy: {np.__version__}")
    click.echo(f"  click: {version('click')}")


if __name__ == "__main__":
    main()
