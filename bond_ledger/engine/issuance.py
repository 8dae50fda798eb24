"""Issuance terms: derived values, maturity and the full schedule.

Pure functions. No I/O.
"""

import logging
from datetime import date

from dateutil.relativedelta import relativedelta

from bond_ledger.config import settings
from bond_ledger.engine.rates import normalize_spec
from bond_ledger.engine.schedule import generate
from bond_ledger.models.issuance import DerivedTerms, IssuanceTerms
from bond_ledger.models.rates import NominalMethod
from bond_ledger.models.schedule import ScheduleRow

logger = logging.getLogger(__name__)


def maturity_date(issue_date: date, months: int) -> date:
    """Issue date plus the schedule length; day clamps to the month's end."""
    return issue_date + relativedelta(months=months)


def payment_dates(issue_date: date, months: int) -> list[date]:
    """Due date of each payment row, periods 1..months."""
    return [issue_date + relativedelta(months=period) for period in range(1, months + 1)]


def derive_terms(
    terms: IssuanceTerms,
    transaction_cost_rate: float | None = None,
    nominal_method: NominalMethod | str | None = None,
) -> DerivedTerms:
    """Commercial value, transaction cost, months, TEM and maturity."""
    if transaction_cost_rate is None:
        transaction_cost_rate = settings.transaction_cost_rate

    months = terms.periods_in_months
    derived = DerivedTerms(
        commercial_value=terms.principal * settings.commercial_value_rate,
        transaction_cost=terms.principal * transaction_cost_rate,
        periods_in_months=months,
        monthly_rate=normalize_spec(terms.interest_rate, nominal_method),
        maturity_date=maturity_date(terms.issue_date, months) if terms.issue_date is not None else None,
    )
    logger.debug(
        "Derived terms for %r: %d months, TEM %.10f, cost %.2f",
        terms.name, months, derived.monthly_rate, derived.transaction_cost,
    )
    return derived


def build_schedule(
    terms: IssuanceTerms,
    transaction_cost_rate: float | None = None,
    nominal_method: NominalMethod | str | None = None,
) -> tuple[DerivedTerms, tuple[ScheduleRow, ...]]:
    derived = derive_terms(terms, transaction_cost_rate, nominal_method)
    rows = generate(
        principal=terms.principal,
        commercial_value=derived.commercial_value,
        transaction_cost=derived.transaction_cost,
        periods_in_months=derived.periods_in_months,
        monthly_rate=derived.monthly_rate,
        original_rate_magnitude=terms.interest_rate.magnitude,
    )
    logger.info("Built schedule for %r: %d rows", terms.name, len(rows))
    return derived, rows
