"""Initial snapshot for a newly written pawn loan."""

from datetime import date, datetime
from decimal import Decimal

from src.engine.errors import InvalidLoanError
from src.engine.payoff import ONBOARDING_DAYS, TERM_DAYS, add_days, as_date, onboarding_obligation
from src.models.loan import PawnLoan


def originate_loan(
    principal: int,
    monthly_interest_rate: Decimal,
    onboarding_fee: int,
    start_date: date | datetime,
    loan_id: str = "",
) -> PawnLoan:
    """Build the day-1 snapshot.

    First payment (fee + one month of interest) is due 30 days after start;
    the term ends 450 days after start.
    """
    if principal < 1:
        raise InvalidLoanError("Principal must be at least 1 cent")
    if onboarding_fee < 0:
        raise InvalidLoanError("Onboarding fee must be non-negative")
    rate = Decimal(str(monthly_interest_rate))
    if not Decimal("0") <= rate <= Decimal("1"):
        raise InvalidLoanError(f"Monthly interest rate {rate} outside [0, 1]")

    start = as_date(start_date)
    return PawnLoan(
        loan_id=loan_id,
        principal=principal,
        principal_remaining=principal,
        monthly_interest_rate=rate,
        onboarding_fee=onboarding_fee,
        start_date=start,
        term_end_date=add_days(start, TERM_DAYS),
        next_payment_due_date=add_days(start, ONBOARDING_DAYS),
        current_cycle_start=start,
        onboarding_fee_remaining=onboarding_obligation(principal, rate, onboarding_fee),
        onboarding_fee_paid=False,
    )
