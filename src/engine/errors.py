"""Exception hierarchy for the payoff engine."""


class PawnEngineError(Exception):
    """Base exception for all engine errors."""


class InvalidPaymentError(PawnEngineError, ValueError):
    """Raised when a payment amount cannot be applied (e.g. non-positive)."""


class InvalidLoanError(PawnEngineError, ValueError):
    """Raised when a loan snapshot or reference date breaks an invariant."""


class CycleOptionRequiredError(PawnEngineError):
    """Raised when a partial interest payment arrives without option A or B.

    The caller should re-prompt the customer rather than pick a default.
    """

    def __init__(self, interest_owed: int, amount: int):
        self.interest_owed = interest_owed
        self.amount = amount
        super().__init__(
            f"Cycle option (A or B) is required: payment of {amount} cents "
            f"is less than {interest_owed} cents of interest owed"
        )
