from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class LoanPeriod(Enum):
    ONBOARDING = "onboarding"  # Days 1-30: fee + one full month of interest
    INTEREST_BEARING = "interest_bearing"  # Days 31-450: daily interest
    PRINCIPAL_ONLY = "principal_only"  # Days 451+: no more interest


class CycleOption(Enum):
    """How a partial interest payment resets (or keeps) the payment cycle."""
    NEW_CYCLE = "A"
    KEEP_DUE_DATE = "B"
    NOT_APPLICABLE = "none"

    @classmethod
    def coerce(cls, value: "CycleOption | str | None") -> "CycleOption":
        if value is None:
            return cls.NOT_APPLICABLE
        if isinstance(value, cls):
            return value
        return cls(value)


class LoanStatus(Enum):
    ACTIVE = "active"
    REDEEMED = "redeemed"
    FORFEITED = "forfeited"


@dataclass(frozen=True)
class PawnLoan:
    """Snapshot of a pawn loan. All money in integer cents."""
    principal: int
    principal_remaining: int
    monthly_interest_rate: Decimal  # e.g. Decimal("0.20") for 20%/month
    onboarding_fee: int  # Storage/handling fee
    start_date: date
    next_payment_due_date: date
    term_end_date: date | None = None
    current_cycle_start: date | None = None
    onboarding_fee_remaining: int = 0  # 0 = nothing paid yet (while unpaid)
    onboarding_fee_paid: bool = False
    interest_carried: int = 0  # Unpaid interest kept by a keep-due-date payment
    loan_id: str = ""
    status: LoanStatus = LoanStatus.ACTIVE

    @property
    def is_redeemed(self) -> bool:
        return self.principal_remaining == 0

    @property
    def is_open(self) -> bool:
        """Still collecting payments: not redeemed and not forfeited."""
        return not self.is_redeemed and self.status is not LoanStatus.FORFEITED
