from dataclasses import dataclass
from datetime import date
from enum import Enum

from bond_ledger.models.rates import RateSpec


class PeriodUnit(Enum):
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True)
class IssuanceTerms:
    principal: float
    period_count: int
    period_unit: PeriodUnit
    cok: float  # Discount rate, TEA percent
    interest_rate: RateSpec
    name: str = ""
    issue_date: date | None = None

    @property
    def periods_in_months(self) -> int:
        if self.period_unit is PeriodUnit.YEARS:
            return self.period_count * 12
        return self.period_count


@dataclass(frozen=True)
class DerivedTerms:
    commercial_value: float
    transaction_cost: float
    periods_in_months: int
    monthly_rate: float  # TEM as a decimal fraction
    maturity_date: date | None = None
