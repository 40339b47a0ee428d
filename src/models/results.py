from dataclasses import dataclass
from datetime import date
from enum import Enum

from src.models.loan import CycleOption, LoanPeriod, PawnLoan


class RiskUrgency(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class PayoffState:
    period: LoanPeriod
    loan_day: int  # 1-based
    days_into_period: int

    # Cents per day; only charged in the interest-bearing period
    daily_interest_rate: int

    # What's owed on the reference date (cents)
    onboarding_owed: int
    interest_owed: int
    principal_owed: int
    total_owed: int

    next_payment_due_date: date
    term_end_date: date
    is_in_grace_period: bool = False
    days_past_due: int = 0
    days_until_forfeiture: int | None = None  # None = forfeiture disabled


@dataclass(frozen=True)
class AppliedPayment:
    cycle_option: CycleOption
    period: LoanPeriod
    loan_day: int
    applied_to_onboarding: int
    applied_to_interest: int
    applied_to_principal: int
    unapplied: int  # Overflow beyond everything owed, returned to the caller
    days_covered: int
    new_due_date: date
    remaining_owed: int
    is_full_payment: bool
    is_redeemed: bool
    loan: PawnLoan  # Snapshot after the payment

    @property
    def total_applied(self) -> int:
        return self.applied_to_onboarding + self.applied_to_interest + self.applied_to_principal


@dataclass(frozen=True)
class PaymentPreview:
    payment_amount: int
    period: LoanPeriod
    days_covered: int
    option_a: AppliedPayment
    option_b: AppliedPayment
    can_pay_full: bool
    full_payment_amount: int
    requires_choice: bool  # Partial interest payment: caller must pick A or B


@dataclass(frozen=True)
class ForfeitureRisk:
    loan_id: str
    days_overdue: int
    days_until_forfeiture: int | None
    urgency: RiskUrgency
    payoff: PayoffState
