"""Constant-amortization schedule (boletas).

Pure functions: floats in, immutable rows out. No I/O.
"""

import logging
import math
from itertools import accumulate
from typing import Iterable

from bond_ledger.errors import InvalidPeriodCount, ScheduleError
from bond_ledger.models.schedule import ScheduleRow

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 1e-6
PAYMENT_FLAG = "S"


def _check_period_count(periods_in_months) -> int:
    try:
        n = float(periods_in_months)
    except (TypeError, ValueError):
        raise InvalidPeriodCount(f"Period count must be numeric, got {periods_in_months!r}") from None
    if not math.isfinite(n) or n <= 0 or n != int(n):
        raise InvalidPeriodCount(f"Period count must be a positive integer, got {periods_in_months!r}")
    return int(n)


def _check_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ScheduleError(f"{name} must be finite, got {value!r}")


def disbursement_row(commercial_value: float, transaction_cost: float) -> ScheduleRow:
    """Period 0: investor pays the net price, issuer receives price plus costs."""
    return ScheduleRow(
        period=0,
        investor_flow=-(commercial_value - transaction_cost),
        issuer_flow=commercial_value + transaction_cost,
    )


def generate(
    principal: float,
    commercial_value: float,
    transaction_cost: float,
    periods_in_months: int,
    monthly_rate: float,
    original_rate_magnitude: float,
) -> tuple[ScheduleRow, ...]:
    """Generate the full schedule, period 0 through N.

    Principal is repaid in equal parts (principal / N); interest accrues on the
    opening balance at the monthly rate. Opening balances are a running scan
    over the periods, so no row is touched once built.
    """
    n = _check_period_count(periods_in_months)
    _check_finite(
        principal=principal,
        commercial_value=commercial_value,
        transaction_cost=transaction_cost,
        monthly_rate=monthly_rate,
    )
    amortization = principal / n
    tep = monthly_rate * 100

    # Opening balance of each payment period: principal, principal - a, ...
    openings = list(accumulate(range(n - 1), lambda balance, _: balance - amortization, initial=principal))

    rows = [disbursement_row(commercial_value, transaction_cost)]
    for period, opening in enumerate(openings, start=1):
        interest = opening * monthly_rate
        installment = interest + amortization
        if not math.isfinite(installment):
            raise ScheduleError(f"Installment overflowed in period {period}")
        closing = opening - amortization
        if period == n:
            if not math.isfinite(closing) or abs(closing) >= BALANCE_TOLERANCE * max(1.0, abs(principal)):
                raise ScheduleError(f"Final balance drifted to {closing!r}")
            closing = 0.0
        rows.append(ScheduleRow(
            period=period,
            investor_flow=installment,
            issuer_flow=-installment,
            tea=original_rate_magnitude,
            tep=tep,
            pg=PAYMENT_FLAG,
            opening_balance=opening,
            interest=interest,
            amortization=amortization,
            installment=installment,
            closing_balance=closing,
        ))

    logger.debug("Generated %d payment rows, amortization %.6f per period", n, amortization)
    return tuple(rows)


def sort_rows(rows: Iterable[ScheduleRow]) -> list[ScheduleRow]:
    """Rows in period order, regardless of the order storage returned them in."""
    return sorted(rows, key=lambda row: row.period)


def investor_flows(rows: Iterable[ScheduleRow]) -> list[float]:
    return [row.investor_flow for row in sort_rows(rows)]


def issuer_flows(rows: Iterable[ScheduleRow]) -> list[float]:
    return [row.issuer_flow for row in sort_rows(rows)]
