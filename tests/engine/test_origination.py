from datetime import date, datetime
from decimal import Decimal

import pytest

from src.engine.errors import InvalidLoanError
from src.engine.origination import originate_loan
from src.engine.payoff import add_days, calculate_payoff
from src.models.loan import LoanPeriod


class TestOriginateLoan:
    def test_initial_state(self):
        loan = originate_loan(10000, Decimal("0.20"), 500, date(2025, 1, 1), loan_id="L-1")
        assert loan.loan_id == "L-1"
        assert loan.principal_remaining == 10000
        assert loan.term_end_date == add_days(date(2025, 1, 1), 450)
        assert loan.next_payment_due_date == date(2025, 1, 31)
        assert loan.current_cycle_start == date(2025, 1, 1)
        # $5 storage + $20 interest
        assert loan.onboarding_fee_remaining == 2500
        assert not loan.onboarding_fee_paid

    def test_day_one_payoff(self):
        loan = originate_loan(10000, Decimal("0.20"), 500, date(2025, 1, 1))
        state = calculate_payoff(loan, date(2025, 1, 1))
        assert state.period is LoanPeriod.ONBOARDING
        assert state.total_owed == 12500

    def test_datetime_start(self):
        loan = originate_loan(10000, Decimal("0.20"), 0, datetime(2025, 1, 1, 16, 45))
        assert loan.start_date == date(2025, 1, 1)

    def test_float_rate_converted(self):
        loan = originate_loan(10000, 0.2, 0, date(2025, 1, 1))
        assert loan.monthly_interest_rate == Decimal("0.2")
        assert loan.onboarding_fee_remaining == 2000

    @pytest.mark.parametrize(
        "principal, rate, fee",
        [(0, Decimal("0.20"), 0), (10000, Decimal("1.5"), 0), (10000, Decimal("-0.1"), 0), (10000, Decimal("0.2"), -1)],
    )
    def test_invalid(self, principal, rate, fee):
        with pytest.raises(InvalidLoanError):
            originate_loan(principal, rate, fee, date(2025, 1, 1))
