"""Canonical test fixtures used across all engine tests.

Fixture: $100 principal, 20%/month, $5 storage fee, started 2025-01-01.
One full month of interest = $20.00, daily rate = 67 cents.
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from src.config import Settings
from src.engine.payoff import ONBOARDING_DAYS, add_days
from src.models.loan import PawnLoan
from tests.factories import START, day


@pytest.fixture
def new_loan() -> PawnLoan:
    """Day-1 loan with nothing paid yet."""
    return PawnLoan(
        loan_id="loan-1",
        principal=10000,
        principal_remaining=10000,
        monthly_interest_rate=Decimal("0.20"),
        onboarding_fee=500,
        start_date=START,
        term_end_date=add_days(START, 450),
        next_payment_due_date=add_days(START, ONBOARDING_DAYS),
        current_cycle_start=START,
    )


@pytest.fixture
def interest_loan(new_loan) -> PawnLoan:
    """First month paid; interest cycle started on day 31, due on day 61."""
    return replace(
        new_loan,
        onboarding_fee_paid=True,
        onboarding_fee_remaining=0,
        current_cycle_start=day(31),
        next_payment_due_date=day(61),
    )


@pytest.fixture
def forfeiture_settings() -> Settings:
    return Settings(forfeiture_enabled=True, forfeiture_days_threshold=60)
