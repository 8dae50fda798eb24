"""Canonical test fixtures used across all engine tests.

Fixture: 10,000 capital, 3 monthly periods, 1% TEM, COK 10% TEA.
Commercial value 9,850 and transaction cost 100 (1% of capital).
"""

from datetime import date

import pytest

from bond_ledger.engine.schedule import generate
from bond_ledger.models.issuance import IssuanceTerms, PeriodUnit
from bond_ledger.models.rates import RateSpec, RateType


@pytest.fixture
def canonical_terms() -> IssuanceTerms:
    return IssuanceTerms(
        principal=10000.0,
        period_count=3,
        period_unit=PeriodUnit.MONTHS,
        cok=10.0,
        interest_rate=RateSpec(magnitude=1.0, convention=RateType.TEM),
        name="Canonical",
        issue_date=date(2025, 1, 15),
    )


@pytest.fixture
def canonical_rows():
    return generate(
        principal=10000.0,
        commercial_value=9850.0,
        transaction_cost=100.0,
        periods_in_months=3,
        monthly_rate=0.01,
        original_rate_magnitude=1.0,
    )


@pytest.fixture
def long_terms() -> IssuanceTerms:
    """30-year issuance at 9% TNA."""
    return IssuanceTerms(
        principal=250000.0,
        period_count=30,
        period_unit=PeriodUnit.YEARS,
        cok=8.0,
        interest_rate=RateSpec(magnitude=9.0, convention=RateType.TNA),
        name="Long",
    )
