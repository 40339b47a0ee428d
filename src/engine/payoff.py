"""Period classification and payoff calculation for 15-month pawn loans.

Payment periods:
    Onboarding (days 1-30): storage fee + one FULL month of interest, never prorated.
    Interest-bearing (days 31-450): interest accrues daily at monthly interest / 30.
    Principal-only (days 451+): no more interest, payments go straight to principal.

Pure functions: integer cents in, dataclass out. No I/O.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP

from src.engine.errors import InvalidLoanError
from src.models.loan import LoanPeriod, PawnLoan
from src.models.results import PayoffState

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30
ONBOARDING_DAYS = 30
TERM_MONTHS = 15
TERM_DAYS = TERM_MONTHS * DAYS_PER_MONTH  # 450


def as_date(value: date | datetime) -> date:
    """Strip time-of-day so day arithmetic only sees calendar dates."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    return (as_date(end) - as_date(start)).days


def add_days(day: date | datetime, days: int) -> date:
    return as_date(day) + timedelta(days=days)


def calculate_loan_day(start_date: date | datetime, reference_date: date | datetime) -> int:
    """1-based day of the loan; the start date itself is day 1."""
    return days_between(start_date, reference_date) + 1


def determine_period(loan_day: int) -> LoanPeriod:
    if loan_day <= ONBOARDING_DAYS:
        return LoanPeriod.ONBOARDING
    if loan_day <= TERM_DAYS:
        return LoanPeriod.INTEREST_BEARING
    return LoanPeriod.PRINCIPAL_ONLY


def monthly_interest(principal: int, monthly_rate: Decimal) -> int:
    """One full month of simple interest on the original principal, floored to the cent."""
    raw = Decimal(principal) * Decimal(str(monthly_rate))
    return int(raw.to_integral_value(rounding=ROUND_FLOOR))


def daily_interest_rate(principal: int, monthly_rate: Decimal) -> int:
    """Cents of interest per day.

    Nearest cent, halves round up: $20.00/month -> 67 cents/day.
    """
    per_day = Decimal(monthly_interest(principal, monthly_rate)) / DAYS_PER_MONTH
    return int(per_day.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def onboarding_obligation(principal: int, monthly_rate: Decimal, onboarding_fee: int) -> int:
    """Storage fee + full month of interest, due during the onboarding period."""
    return onboarding_fee + monthly_interest(principal, monthly_rate)


def days_covered(amount: int, daily_rate: int) -> int:
    if daily_rate <= 0 or amount <= 0:
        return 0
    return amount // daily_rate


def term_end_date(loan: PawnLoan) -> date:
    return loan.term_end_date or add_days(loan.start_date, TERM_DAYS)


def cycle_start(loan: PawnLoan) -> date:
    return as_date(loan.current_cycle_start or add_days(loan.start_date, ONBOARDING_DAYS))


def validate_loan(loan: PawnLoan) -> None:
    """Reject snapshots that break the model's invariants."""
    if loan.principal < 0 or loan.onboarding_fee < 0:
        raise InvalidLoanError("Principal and onboarding fee must be non-negative")
    if not 0 <= loan.principal_remaining <= loan.principal:
        raise InvalidLoanError(
            f"principal_remaining {loan.principal_remaining} outside [0, {loan.principal}]"
        )
    if not Decimal("0") <= Decimal(str(loan.monthly_interest_rate)) <= Decimal("1"):
        raise InvalidLoanError(f"Monthly interest rate {loan.monthly_interest_rate} outside [0, 1]")
    if loan.onboarding_fee_remaining < 0 or loan.interest_carried < 0:
        raise InvalidLoanError("Remaining onboarding fee and carried interest must be non-negative")


def calculate_payoff(
    loan: PawnLoan,
    reference_date: date | datetime,
    forfeiture_threshold_days: int | None = None,
) -> PayoffState:
    """Current payoff state of a loan on a given date.

    Args:
        loan: Loan snapshot
        reference_date: Date to calculate for
        forfeiture_threshold_days: Days past due before forfeiture (None = disabled)
    """
    validate_loan(loan)
    today = as_date(reference_date)
    if today < as_date(loan.start_date):
        raise InvalidLoanError(f"Reference date {today} is before loan start {loan.start_date}")

    loan_day = calculate_loan_day(loan.start_date, today)
    period = determine_period(loan_day)
    daily_rate = daily_interest_rate(loan.principal, loan.monthly_interest_rate)

    onboarding_owed = 0
    interest_owed = 0
    principal_owed = loan.principal_remaining

    if period is LoanPeriod.ONBOARDING:
        days_into_period = loan_day
        if not loan.onboarding_fee_paid:
            if loan.onboarding_fee_remaining > 0:
                onboarding_owed = loan.onboarding_fee_remaining
            else:
                onboarding_owed = onboarding_obligation(
                    loan.principal, loan.monthly_interest_rate, loan.onboarding_fee
                )
    elif period is LoanPeriod.INTEREST_BEARING:
        days_into_period = loan_day - ONBOARDING_DAYS
        accrued_days = max(0, days_between(cycle_start(loan), today))
        interest_owed = loan.interest_carried + accrued_days * daily_rate
    else:
        # No interest after term, carried or otherwise
        days_into_period = loan_day - TERM_DAYS

    if loan.is_redeemed:
        # Redeemed is terminal: nothing accrues once principal is repaid
        onboarding_owed = 0
        interest_owed = 0

    total_owed = onboarding_owed + interest_owed + principal_owed

    days_past_due = max(0, days_between(loan.next_payment_due_date, today))
    is_in_grace_period = False
    days_until_forfeiture = None
    if forfeiture_threshold_days is not None and days_past_due > 0:
        is_in_grace_period = True
        days_until_forfeiture = forfeiture_threshold_days - days_past_due

    logger.debug(
        "Loan %s day %d (%s): onboarding=%d interest=%d principal=%d",
        loan.loan_id or "<unsaved>", loan_day, period.value,
        onboarding_owed, interest_owed, principal_owed,
    )

    return PayoffState(
        period=period,
        loan_day=loan_day,
        days_into_period=days_into_period,
        daily_interest_rate=daily_rate,
        onboarding_owed=onboarding_owed,
        interest_owed=interest_owed,
        principal_owed=principal_owed,
        total_owed=total_owed,
        next_payment_due_date=as_date(loan.next_payment_due_date),
        term_end_date=term_end_date(loan),
        is_in_grace_period=is_in_grace_period,
        days_past_due=days_past_due,
        days_until_forfeiture=days_until_forfeiture,
    )


def redemption_amount(loan: PawnLoan, reference_date: date | datetime) -> int:
    """Total payoff to redeem the loan on the reference date."""
    return calculate_payoff(loan, reference_date).total_owed
