"""Side-by-side preview of option A and option B for a candidate payment.

Both options come from apply_payment itself, so a preview always matches
what committing that option would do.
"""

from datetime import date, datetime

from src.engine.allocation import apply_payment, requires_cycle_option
from src.engine.money import format_cents
from src.engine.payoff import as_date, calculate_payoff, days_between, days_covered
from src.models.loan import CycleOption, LoanPeriod, PawnLoan
from src.models.results import AppliedPayment, PaymentPreview


def preview_payment_options(
    loan: PawnLoan,
    amount: int,
    reference_date: date | datetime,
) -> PaymentPreview:
    """Run the allocator once per option without committing either."""
    today = as_date(reference_date)
    state = calculate_payoff(loan, today)

    option_a = apply_payment(loan, amount, CycleOption.NEW_CYCLE, today)
    option_b = apply_payment(loan, amount, CycleOption.KEEP_DUE_DATE, today)

    return PaymentPreview(
        payment_amount=amount,
        period=state.period,
        days_covered=days_covered(amount, state.daily_interest_rate),
        option_a=option_a,
        option_b=option_b,
        can_pay_full=amount >= state.total_owed,
        full_payment_amount=state.total_owed,
        requires_choice=requires_cycle_option(state.period, amount, state.interest_owed),
    )


def describe_option(applied: AppliedPayment, reference_date: date | datetime) -> str:
    """Customer-facing one-liner for a previewed option."""
    if applied.period is LoanPeriod.PRINCIPAL_ONLY:
        return f"Applied to principal, {format_cents(applied.remaining_owed)} principal remaining"
    if applied.cycle_option is CycleOption.NEW_CYCLE:
        days = days_between(reference_date, applied.new_due_date)
        return f"New cycle: next payment due in {days} days"
    if applied.cycle_option is CycleOption.KEEP_DUE_DATE:
        return (
            f"Keep original due date, only owe {format_cents(applied.remaining_owed)} next time"
        )
    if applied.period is LoanPeriod.ONBOARDING and applied.remaining_owed > 0:
        return f"First month: {format_cents(applied.remaining_owed)} still owed"
    return f"Paid in full for this cycle, next payment due {applied.new_due_date.isoformat()}"
