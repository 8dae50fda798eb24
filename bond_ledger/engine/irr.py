"""Present value, IRR and annualization over a cash-flow series.

Pure functions. No I/O. flows[0] is the disbursement at period 0.
"""

import logging
import math
from typing import Protocol, Sequence

from scipy.optimize import brentq

from bond_ledger.config import settings
from bond_ledger.errors import NoConvergence

logger = logging.getLogger(__name__)

RATE_FLOOR = -0.99
MAX_STEP = 0.5
STEP_RESOLUTION = 1e-15
DEFAULT_SEEDS = (0.10, 0.05, 0.15, 0.01, 0.50)
DAYS_PER_YEAR = 360


def present_value(flows: Sequence[float], period_rate: float) -> float:
    """NPV = sum(flows[t] / (1 + r)^t), t = 0..N."""
    if period_rate <= -1:
        raise ValueError(f"Period rate must be greater than -1, got {period_rate!r}")
    return sum(cf / (1 + period_rate) ** t for t, cf in enumerate(flows))


def _pv_derivative(flows: Sequence[float], rate: float) -> float:
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(flows) if t > 0)


def annualized_rate(period_rate: float, period_days: float) -> float:
    """Effective annual rate on a 360-day year: (1 + r)^(360 / days) - 1.

    Serves as TCEA for issuer flows and TREA for investor flows.
    """
    if period_days <= 0:
        raise ValueError(f"Period days must be positive, got {period_days!r}")
    return (1 + period_rate) ** (DAYS_PER_YEAR / period_days) - 1


class IRRSolver(Protocol):
    def solve(self, flows: Sequence[float]) -> float:
        ...


class NewtonRaphsonSolver:
    """Damped Newton-Raphson on the NPV function, retried over several seeds."""

    def __init__(
        self,
        seeds: Sequence[float] = DEFAULT_SEEDS,
        tolerance: float | None = None,
        max_iterations: int | None = None,
    ):
        self.seeds = tuple(seeds)
        self.tolerance = settings.irr_tolerance if tolerance is None else tolerance
        self.max_iterations = settings.irr_max_iterations if max_iterations is None else max_iterations

    def _from_seed(self, flows: Sequence[float], seed: float) -> float | None:
        rate = seed
        for _ in range(self.max_iterations):
            try:
                value = present_value(flows, rate)
                slope = _pv_derivative(flows, rate)
            except (OverflowError, ZeroDivisionError):
                return None
            if not math.isfinite(value):
                return None
            if abs(value) < self.tolerance:
                return rate
            if slope == 0 or not math.isfinite(slope):
                return None
            step = value / slope
            # Residual is at rounding noise for large balances; the root is found
            if abs(step) <= STEP_RESOLUTION * max(1.0, abs(rate)):
                return rate
            # Clamp large moves so the iterate cannot jump across the pole at -1
            if abs(step) > MAX_STEP:
                step = math.copysign(MAX_STEP, step)
            rate = max(rate - step, RATE_FLOOR)
        return None

    def solve(self, flows: Sequence[float]) -> float:
        for seed in self.seeds:
            rate = self._from_seed(flows, seed)
            if rate is not None:
                logger.debug("Newton IRR converged from seed %s to %.12f", seed, rate)
                return rate
        raise NoConvergence(f"IRR did not converge from seeds {self.seeds}")


class BrentSolver:
    """Brent's method on the NPV function over a fixed bracket of period rates.

    The default bracket (-50%, 100%) per period keeps (1 + r)^t finite for
    schedules of several hundred periods.
    """

    def __init__(self, lower: float = -0.5, upper: float = 1.0, xtol: float = 1e-12, tolerance: float = 1e-6):
        self.lower = lower
        self.upper = upper
        self.xtol = xtol
        self.tolerance = tolerance

    def solve(self, flows: Sequence[float]) -> float:
        cf_float = [float(cf) for cf in flows]

        def npv(rate: float) -> float:
            return present_value(cf_float, rate)

        try:
            rate = brentq(npv, self.lower, self.upper, xtol=self.xtol, maxiter=settings.irr_max_iterations)
        except (ValueError, RuntimeError, OverflowError, ZeroDivisionError) as e:
            # No sign change in the bracket, iteration cap reached, or the
            # bracket is too wide for the series length
            raise NoConvergence(f"Brent IRR failed: {e}") from e

        residual = npv(rate)
        if not math.isfinite(residual) or abs(residual) >= self.tolerance:
            raise NoConvergence(f"Brent IRR residual too large: {residual!r}")
        logger.debug("Brent IRR converged to %.12f", rate)
        return rate


SOLVERS = {
    "newton": NewtonRaphsonSolver,
    "brent": BrentSolver,
}


def get_solver(name: str | None = None) -> IRRSolver:
    """Solver strategy by name; defaults to settings.irr_solver."""
    name = (name or settings.irr_solver).lower()
    try:
        return SOLVERS[name]()
    except KeyError:
        raise ValueError(f"Unknown IRR solver: {name!r}") from None


def internal_rate_of_return(flows: Sequence[float], solver: IRRSolver | None = None) -> float:
    """Periodic IRR of a cash-flow series.

    Raises NoConvergence when the strategy finds no root; never returns a
    default rate in its place.
    """
    if len(flows) < 2:
        raise NoConvergence("IRR needs at least two cash flows")
    if not all(math.isfinite(cf) for cf in flows):
        raise NoConvergence("Cash flows contain non-finite values")

    solver = solver or get_solver()
    try:
        rate = solver.solve(flows)
    except NoConvergence:
        logger.warning("IRR did not converge for %d cash flows", len(flows))
        raise
    except OverflowError as e:
        logger.warning("IRR overflowed for %d cash flows: %s", len(flows), e)
        raise NoConvergence(f"IRR overflowed: {e}") from e
    if not math.isfinite(rate):
        raise NoConvergence(f"IRR solver returned non-finite rate {rate!r}")
    return rate
