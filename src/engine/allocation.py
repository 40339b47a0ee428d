"""Payment allocation across onboarding fee, interest and principal.

Pure functions: a snapshot and an amount in, an AppliedPayment (with the
updated snapshot) out. Persisting the result is the caller's job.
"""

import logging
from dataclasses import replace
from datetime import date, datetime

from src.engine.errors import CycleOptionRequiredError, InvalidPaymentError
from src.engine.payoff import (
    ONBOARDING_DAYS,
    add_days,
    as_date,
    calculate_payoff,
    days_covered,
)
from src.models.loan import CycleOption, LoanPeriod, LoanStatus, PawnLoan
from src.models.results import AppliedPayment

logger = logging.getLogger(__name__)


def _ensure_open(loan: PawnLoan) -> None:
    if loan.is_open:
        return
    closed_as = "forfeited" if loan.status is LoanStatus.FORFEITED else "redeemed"
    raise InvalidPaymentError(f"Loan {loan.loan_id or '<unsaved>'} is not active: already {closed_as}")


def requires_cycle_option(period: LoanPeriod, amount: int, interest_owed: int) -> bool:
    """A payment short of the interest owed in the interest-bearing period needs option A or B."""
    return period is LoanPeriod.INTEREST_BEARING and amount < interest_owed


def apply_payment(
    loan: PawnLoan,
    amount: int,
    cycle_option: CycleOption | str | None,
    reference_date: date | datetime,
) -> AppliedPayment:
    """Apply a payment to a loan and return how it was allocated.

    Args:
        loan: Loan snapshot before the payment
        amount: Payment in cents, must be positive
        cycle_option: A or B for partial interest payments; ignored otherwise
        reference_date: Date of the payment

    Raises:
        InvalidPaymentError: amount is zero or negative, or the loan is redeemed or forfeited
        CycleOptionRequiredError: partial interest payment without A or B
    """
    if amount <= 0:
        raise InvalidPaymentError(f"Payment amount must be positive, got {amount}")
    _ensure_open(loan)

    option = CycleOption.coerce(cycle_option)
    today = as_date(reference_date)
    state = calculate_payoff(loan, today)

    if requires_cycle_option(state.period, amount, state.interest_owed) and option is CycleOption.NOT_APPLICABLE:
        raise CycleOptionRequiredError(state.interest_owed, amount)

    remaining = amount
    to_onboarding = 0
    to_interest = 0
    to_principal = 0
    remaining_owed = 0
    new_due_date = as_date(loan.next_payment_due_date)
    applied_option = CycleOption.NOT_APPLICABLE
    changes: dict = {}

    if state.period is LoanPeriod.ONBOARDING and not loan.onboarding_fee_paid:
        to_onboarding = min(remaining, state.onboarding_owed)
        remaining -= to_onboarding

        # A zero obligation (no fee, no interest) is settled by any payment
        if to_onboarding == state.onboarding_owed:
            # First full interest cycle starts on day 31, first due on day 61
            new_due_date = add_days(loan.start_date, ONBOARDING_DAYS * 2)
            changes.update(
                onboarding_fee_paid=True,
                onboarding_fee_remaining=0,
                current_cycle_start=add_days(loan.start_date, ONBOARDING_DAYS),
            )
        else:
            remaining_owed = state.onboarding_owed - to_onboarding
            changes["onboarding_fee_remaining"] = remaining_owed

    elif state.period is LoanPeriod.INTEREST_BEARING:
        to_interest = min(remaining, state.interest_owed)
        remaining -= to_interest

        if to_interest >= state.interest_owed:
            new_due_date = add_days(today, ONBOARDING_DAYS)
            changes.update(current_cycle_start=today, interest_carried=0)
        elif option is CycleOption.NEW_CYCLE:
            applied_option = option
            covered = days_covered(to_interest, state.daily_interest_rate)
            new_due_date = add_days(today, max(covered, ONBOARDING_DAYS))
            changes.update(current_cycle_start=today, interest_carried=0)
        else:
            applied_option = option
            remaining_owed = max(0, state.interest_owed - to_interest)
            changes.update(current_cycle_start=today, interest_carried=remaining_owed)

    if remaining > 0:
        to_principal = min(remaining, state.principal_owed)
        remaining -= to_principal

    if state.period is LoanPeriod.PRINCIPAL_ONLY:
        # No contractual cadence after term; the due date is informational
        new_due_date = today
        remaining_owed = state.principal_owed - to_principal

    principal_remaining = loan.principal_remaining - to_principal
    is_redeemed = principal_remaining == 0
    changes.update(principal_remaining=principal_remaining, next_payment_due_date=new_due_date)
    if is_redeemed:
        changes["status"] = LoanStatus.REDEEMED
    total_applied = to_onboarding + to_interest + to_principal

    if remaining > 0:
        logger.warning(
            "Payment of %d on loan %s exceeds amount owed by %d; reporting as unapplied",
            amount, loan.loan_id or "<unsaved>", remaining,
        )
    logger.debug(
        "Loan %s day %d (%s): onboarding=%d interest=%d principal=%d option=%s",
        loan.loan_id or "<unsaved>", state.loan_day, state.period.value,
        to_onboarding, to_interest, to_principal, applied_option.value,
    )
    if is_redeemed:
        logger.info("Loan %s redeemed on %s", loan.loan_id or "<unsaved>", today)

    return AppliedPayment(
        cycle_option=applied_option,
        period=state.period,
        loan_day=state.loan_day,
        applied_to_onboarding=to_onboarding,
        applied_to_interest=to_interest,
        applied_to_principal=to_principal,
        unapplied=remaining,
        days_covered=days_covered(to_interest or to_onboarding, state.daily_interest_rate),
        new_due_date=new_due_date,
        remaining_owed=remaining_owed,
        is_full_payment=total_applied >= state.total_owed,
        is_redeemed=is_redeemed,
        loan=replace(loan, **changes),
    )


def redeem_in_full(loan: PawnLoan, reference_date: date | datetime) -> AppliedPayment:
    """Pay off everything owed today in a single payment."""
    _ensure_open(loan)
    owed = calculate_payoff(loan, reference_date).total_owed
    if owed <= 0:
        raise InvalidPaymentError(f"Loan {loan.loan_id or '<unsaved>'} has nothing owed")
    return apply_payment(loan, owed, CycleOption.NOT_APPLICABLE, reference_date)
