"""CLI: build an issuance schedule and print it with issuer/investor indicators.

Usage:
    bond-ledger --capital 10000 --periods 3 --rate 12 --rate-type TEA --cok 10
    bond-ledger --capital 250000 --periods 2 --unit years --rate 9 --rate-type TNA --cok 8 --issue-date 2025-01-31
"""

import argparse
import logging
import sys
from datetime import date

from bond_ledger.config import settings
from bond_ledger.engine.display import money, percent, row_for_display
from bond_ledger.engine.indicators import investor_indicators, issuer_indicators
from bond_ledger.engine.irr import SOLVERS, get_solver
from bond_ledger.engine.issuance import build_schedule, payment_dates
from bond_ledger.engine.rates import to_rate_spec
from bond_ledger.errors import EngineError
from bond_ledger.models.issuance import DerivedTerms, IssuanceTerms, PeriodUnit
from bond_ledger.models.rates import RateType
from bond_ledger.models.results import IndicatorReport
from bond_ledger.models.schedule import ScheduleRow

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _cell(v) -> str:
    return "" if v is None else f"{v:,.2f}"


# ── Report sections ──────────────────────────────────────────────────────────

def print_terms(terms: IssuanceTerms, derived: DerivedTerms) -> None:
    _header(f"Issuance {terms.name}".rstrip())
    print(f"  Capital:            {money(terms.principal):,}")
    print(f"  Commercial Value:   {money(derived.commercial_value):,}")
    print(f"  Transaction Cost:   {money(derived.transaction_cost):,}")
    print(f"  Periods (months):   {derived.periods_in_months}")
    print(f"  Rate:               {terms.interest_rate.magnitude}% {terms.interest_rate.convention.value}")
    print(f"  TEM:                {percent(derived.monthly_rate * 100)}%")
    if derived.maturity_date:
        print(f"  Maturity:           {derived.maturity_date.isoformat()}")


def print_schedule(rows: tuple[ScheduleRow, ...], issue_date: date | None = None) -> None:
    """Schedule table; a due-date column is shown when the issue date is known."""
    dates = payment_dates(issue_date, len(rows) - 1) if issue_date is not None else None
    _header("Schedule")
    due_header = f" {'Due':>10}" if dates else ""
    print(f"  {'N':>4}{due_header} {'Opening':>14} {'Interest':>12} {'Amort.':>12} {'Installment':>12} "
          f"{'Closing':>14} {'Investor':>13} {'Issuer':>13}")
    for row in rows:
        r = row_for_display(row)
        due = ""
        if dates:
            due_date = "" if row.is_disbursement else dates[row.period - 1].isoformat()
            due = f" {due_date:>10}"
        print(f"  {r['period']:>4}{due} {_cell(r['opening_balance']):>14} {_cell(r['interest']):>12} "
              f"{_cell(r['amortization']):>12} {_cell(r['installment']):>12} "
              f"{_cell(r['closing_balance']):>14} {_cell(r['investor_flow']):>13} {_cell(r['issuer_flow']):>13}")


def print_indicators(report: IndicatorReport) -> None:
    _header(f"{report.party.value.title()} Indicators")
    print(f"  COK per period:     {percent(report.period_discount_rate)}%")
    print(f"  IRR per period:     {percent(report.period_irr)}%")
    print(f"  {report.annualized_label}:               {percent(report.annualized_rate)}%")
    print(f"  NPV:                {money(report.npv):,}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bond issuance schedule and indicators")
    parser.add_argument("--name", default="", help="Issuance name")
    parser.add_argument("--capital", type=float, required=True, help="Principal amount")
    parser.add_argument("--periods", type=int, required=True, help="Number of periods")
    parser.add_argument("--unit", choices=[u.value for u in PeriodUnit], default="months", help="Period unit (default: months)")
    parser.add_argument("--rate", type=float, required=True, help="Interest rate, percent")
    parser.add_argument("--rate-type", choices=[t.value for t in RateType], default="TEA", help="Rate convention (default: TEA)")
    parser.add_argument("--cok", type=float, required=True, help="Discount rate (COK), TEA percent")
    parser.add_argument("--issue-date", type=date.fromisoformat, default=None, help="Issue date, YYYY-MM-DD")
    parser.add_argument("--solver", choices=sorted(SOLVERS), default=None, help="IRR solver (default: from settings)")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    terms = IssuanceTerms(
        principal=args.capital,
        period_count=args.periods,
        period_unit=PeriodUnit(args.unit),
        cok=args.cok,
        interest_rate=to_rate_spec(args.rate, args.rate_type),
        name=args.name,
        issue_date=args.issue_date,
    )
    solver = get_solver(args.solver)

    try:
        derived, rows = build_schedule(terms)
        issuer = issuer_indicators(terms.cok, rows, solver)
        investor = investor_indicators(terms.cok, rows, solver)
    except EngineError as e:
        logger.error("Engine error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_terms(terms, derived)
    print_schedule(rows, terms.issue_date)
    print_indicators(issuer)
    print_indicators(investor)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
