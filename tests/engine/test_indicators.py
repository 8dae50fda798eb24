import pytest

from bond_ledger.engine.indicators import discount_rate_per_period, investor_indicators, issuer_indicators
from bond_ledger.engine.irr import BrentSolver, annualized_rate, internal_rate_of_return, present_value
from bond_ledger.engine.issuance import build_schedule
from bond_ledger.engine.schedule import issuer_flows
from bond_ledger.errors import NoConvergence
from bond_ledger.models.results import Party
from bond_ledger.models.schedule import ScheduleRow


class TestDiscountRate:
    def test_tea_to_monthly(self):
        assert discount_rate_per_period(10.0) == pytest.approx(1.10 ** (1 / 12) - 1)

    def test_zero(self):
        assert discount_rate_per_period(0.0) == 0


class TestIssuerIndicators:
    def test_values(self, canonical_rows):
        report = issuer_indicators(10.0, canonical_rows)
        cok_period = 1.10 ** (1 / 12) - 1
        irr = internal_rate_of_return(issuer_flows(canonical_rows))

        assert report.party is Party.ISSUER
        assert report.annualized_label == "TCEA"
        assert report.period_discount_rate == pytest.approx(cok_period * 100)
        assert report.period_irr == pytest.approx(irr * 100)
        assert report.annualized_rate == pytest.approx(annualized_rate(irr, 30) * 100)
        assert report.npv == pytest.approx(present_value(issuer_flows(canonical_rows), cok_period))

    def test_cost_above_coupon(self, canonical_rows):
        """Issuer receives 9,950 for 10,000 of debt at 1%: cost exceeds 1% per month."""
        report = issuer_indicators(10.0, canonical_rows)
        assert report.period_irr > 1.0

    def test_storage_order_independent(self, canonical_rows):
        ordered = issuer_indicators(10.0, canonical_rows)
        shuffled = issuer_indicators(10.0, [canonical_rows[3], canonical_rows[1], canonical_rows[0], canonical_rows[2]])
        assert shuffled == ordered

    def test_brent_solver(self, canonical_rows):
        newton = issuer_indicators(10.0, canonical_rows)
        brent = issuer_indicators(10.0, canonical_rows, BrentSolver())
        assert brent.period_irr == pytest.approx(newton.period_irr, abs=1e-7)


class TestInvestorIndicators:
    def test_label(self, canonical_rows):
        report = investor_indicators(10.0, canonical_rows)
        assert report.party is Party.INVESTOR
        assert report.annualized_label == "TREA"

    def test_relation_to_issuer(self, canonical_rows):
        issuer = issuer_indicators(10.0, canonical_rows)
        investor = investor_indicators(10.0, canonical_rows)
        assert investor.period_discount_rate == issuer.period_discount_rate
        assert issuer.period_irr == pytest.approx(1.25524, abs=1e-4)
        assert investor.period_irr == pytest.approx(2.29806, abs=1e-4)
        assert investor.annualized_rate > issuer.annualized_rate
        # Payment flows cancel; only row 0 differs, by 2 x 100 of transaction cost
        assert investor.npv + issuer.npv == pytest.approx(200.0)

    def test_positive_npv_at_low_cok(self, canonical_rows):
        """Investor pays 9,750 for flows worth ~10,000: positive NPV at 5% TEA."""
        assert investor_indicators(5.0, canonical_rows).npv > 0

    def test_long_issuance(self, long_terms):
        _, rows = build_schedule(long_terms)
        report = investor_indicators(long_terms.cok, rows)
        assert report.annualized_rate > 9.0


class TestIndicatorFailure:
    class _FixedSolver:
        def __init__(self, rate):
            self.rate = rate

        def solve(self, flows):
            return self.rate

    def test_no_convergence_propagates(self):
        rows = [
            ScheduleRow(period=0, investor_flow=100.0, issuer_flow=-100.0),
            ScheduleRow(period=1, investor_flow=50.0, issuer_flow=-50.0, installment=50.0),
        ]
        with pytest.raises(NoConvergence):
            investor_indicators(10.0, rows)
        with pytest.raises(NoConvergence):
            issuer_indicators(10.0, rows)

    @pytest.mark.parametrize("rate", [-1.0, -1.5])
    def test_rate_below_minus_one(self, canonical_rows, rate):
        with pytest.raises(NoConvergence):
            issuer_indicators(10.0, canonical_rows, self._FixedSolver(rate))

    def test_annualized_overflow(self, canonical_rows):
        with pytest.raises(NoConvergence):
            investor_indicators(10.0, canonical_rows, self._FixedSolver(1e30))
