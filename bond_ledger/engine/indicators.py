"""Profitability indicators for issuer (TCEA) and investor (TREA).

Pure functions over persisted schedule rows. No I/O.
"""

import logging
import math
from typing import Iterable

from bond_ledger.engine.irr import IRRSolver, annualized_rate, internal_rate_of_return, present_value
from bond_ledger.engine.rates import normalize
from bond_ledger.engine.schedule import issuer_flows, investor_flows
from bond_ledger.errors import NoConvergence
from bond_ledger.models.rates import RateType
from bond_ledger.models.results import IndicatorReport, Party
from bond_ledger.models.schedule import ScheduleRow

logger = logging.getLogger(__name__)

PERIOD_DAYS = 30


def discount_rate_per_period(cok: float) -> float:
    """COK is always quoted as a TEA percent; returns the monthly rate."""
    return normalize(cok, RateType.TEA)


def _annualized(irr: float) -> float:
    """TCEA/TREA from a monthly IRR; rejects rates the power cannot represent."""
    if irr <= -1:
        raise NoConvergence(f"IRR {irr!r} is at or below -100% per period")
    try:
        rate = annualized_rate(irr, PERIOD_DAYS)
    except OverflowError as e:
        raise NoConvergence(f"Annualized rate overflowed for IRR {irr!r}") from e
    if not math.isfinite(rate):
        raise NoConvergence(f"Annualized rate is non-finite for IRR {irr!r}")
    return rate


def _indicators(
    party: Party,
    flows: list[float],
    cok: float,
    solver: IRRSolver | None,
) -> IndicatorReport:
    cok_period = discount_rate_per_period(cok)
    irr = internal_rate_of_return(flows, solver)
    report = IndicatorReport(
        party=party,
        period_discount_rate=cok_period * 100,
        period_irr=irr * 100,
        annualized_rate=_annualized(irr) * 100,
        npv=present_value(flows, cok_period),
    )
    logger.debug("%s indicators: %s", party.value, report)
    return report


def issuer_indicators(
    cok: float, rows: Iterable[ScheduleRow], solver: IRRSolver | None = None
) -> IndicatorReport:
    """COK per period, IRR per period, TCEA and NPV of the issuer's flows."""
    return _indicators(Party.ISSUER, issuer_flows(rows), cok, solver)


def investor_indicators(
    cok: float, rows: Iterable[ScheduleRow], solver: IRRSolver | None = None
) -> IndicatorReport:
    """COK per period, IRR per period, TREA and NPV of the investor's flows."""
    return _indicators(Party.INVESTOR, investor_flows(rows), cok, solver)
