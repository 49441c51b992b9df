"""Numeric verification of solved equations.

Checks a solution ``x = E`` against the equation it came from by sampling
random values for every other variable, computing ``x`` from ``E``, and
comparing both sides of the original equation at those points.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import logging

import numpy as np

from eqtree.expression.equation import Equation
from eqtree.expression.evaluator import evaluate_array

logger = logging.getLogger(__name__)


@dataclass
class VerificationReport:
    """Outcome of sampled verification.

    Attributes:
        n_samples: Number of sampled assignments
        n_checked: Samples where every quantity was finite
        max_abs_error: Largest |lhs - rhs| among checked samples
        passed: True if all checked samples agree (and at least one was checked)
    """

    n_samples: int
    n_checked: int
    max_abs_error: float
    passed: bool

    def summary(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        return (
            f"Verification: {status} "
            f"({self.n_checked}/{self.n_samples} samples checked, "
            f"max |error| = {self.max_abs_error:.3g})"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_samples": self.n_samples,
            "n_checked": self.n_checked,
            "max_abs_error": self.max_abs_error,
            "passed": self.passed,
        }


def verify_solution(
    original: Equation,
    solved: Equation,
    variable: str,
    n_samples: int = 32,
    seed: int | None = None,
    low: float = -10.0,
    high: float = 10.0,
    rtol: float = 1e-7,
    atol: float = 1e-9,
) -> VerificationReport:
    """Verify that ``solved`` reproduces ``original`` at random points.

    Args:
        original: Equation before solving
        solved: Equation of the form ``variable = E``
        variable: Name of the isolated variable
        n_samples: Number of random assignments
        seed: Random seed for reproducibility
        low: Lower bound for sampled values
        high: Upper bound for sampled values
        rtol: Relative tolerance for comparison
        atol: Absolute tolerance for comparison

    Returns:
        VerificationReport
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be positive, got {n_samples}")

    rng = np.random.default_rng(seed)
    names = [n for n in original.variables() if n != variable]
    samples = {name: rng.uniform(low, high, n_samples) for name in names}

    shape = (n_samples,)
    target = np.broadcast_to(evaluate_array(solved.rhs, samples), shape)
    assignments = {**samples, variable: target}

    lhs = np.broadcast_to(evaluate_array(original.lhs, assignments), shape)
    rhs = np.broadcast_to(evaluate_array(original.rhs, assignments), shape)

    finite = np.isfinite(lhs) & np.isfinite(rhs) & np.isfinite(target)
    n_checked = int(finite.sum())

    if n_checked == 0:
        logger.warning(f"No finite samples while verifying {solved}")
        return VerificationReport(n_samples, 0, float("nan"), False)

    errors = np.abs(lhs[finite] - rhs[finite])
    passed = bool(np.all(np.isclose(lhs[finite], rhs[finite], rtol=rtol, atol=atol)))

    logger.debug(f"Verified {solved} on {n_checked}/{n_samples} samples: passed={passed}")

    return VerificationReport(
        n_samples=n_samples,
        n_checked=n_checked,
        max_abs_error=float(errors.max()),
        passed=passed,
    )
