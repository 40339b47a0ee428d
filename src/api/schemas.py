"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from src.models.loan import LoanStatus


# ---- Request schemas ----

class LoanSnapshot(BaseModel):
    """Loan state as stored by the caller. Money in cents."""
    loan_id: str = ""
    principal: int = Field(..., ge=1)
    principal_remaining: int = Field(..., ge=0)
    monthly_interest_rate: Decimal = Field(..., ge=0, le=1)
    onboarding_fee: int = Field(0, ge=0)
    start_date: date
    next_payment_due_date: date
    term_end_date: date | None = None
    current_cycle_start: date | None = None
    onboarding_fee_remaining: int = Field(0, ge=0)
    onboarding_fee_paid: bool = False
    interest_carried: int = Field(0, ge=0)
    status: LoanStatus = LoanStatus.ACTIVE


class OriginateRequest(BaseModel):
    loan_id: str = ""
    principal: int = Field(..., ge=1, description="Loan amount in cents")
    monthly_interest_rate: Decimal = Field(..., ge=0, le=1, description="e.g. 0.20 for 20%")
    onboarding_fee: int = Field(0, ge=0, description="Storage fee in cents")
    start_date: date | None = None


class PayoffRequest(BaseModel):
    loan: LoanSnapshot
    as_of: date | None = None


class PaymentPreviewRequest(BaseModel):
    loan: LoanSnapshot
    amount: int = Field(..., ge=1, description="Payment in cents")
    as_of: date | None = None


class PaymentRequest(BaseModel):
    loan: LoanSnapshot
    amount: int = Field(..., ge=1, description="Payment in cents")
    cycle_option: Literal["A", "B"] | None = None
    notes: str | None = None
    as_of: date | None = None


class RedeemRequest(BaseModel):
    loan: LoanSnapshot
    notes: str | None = None
    as_of: date | None = None


class AtRiskRequest(BaseModel):
    loans: list[LoanSnapshot]
    as_of: date | None = None


class ProcessForfeituresRequest(BaseModel):
    loans: list[LoanSnapshot]
    as_of: date | None = None


# ---- Response schemas ----

class PayoffResponse(BaseModel):
    period: str
    loan_day: int
    days_into_period: int
    daily_interest_rate: int
    onboarding_owed: int
    interest_owed: int
    principal_owed: int
    total_owed: int
    next_payment_due_date: date
    term_end_date: date
    is_in_grace_period: bool
    days_past_due: int
    days_until_forfeiture: int | None = None


class LoanResponse(BaseModel):
    loan: LoanSnapshot
    payoff: PayoffResponse


class AppliedPaymentResponse(BaseModel):
    cycle_option: str | None = None
    period: str
    loan_day: int
    applied_to_onboarding: int
    applied_to_interest: int
    applied_to_principal: int
    unapplied: int
    days_covered: int
    new_due_date: date
    remaining_owed: int
    is_full_payment: bool
    is_redeemed: bool
    description: str = ""
    loan: LoanSnapshot


class PaymentResponse(BaseModel):
    applied: AppliedPaymentResponse
    payoff: PayoffResponse
    notes: str | None = None


class PaymentPreviewDetail(BaseModel):
    days_covered: int
    option_a: AppliedPaymentResponse
    option_b: AppliedPaymentResponse
    can_pay_full: bool
    full_payment_amount: int


class PaymentPreviewResponse(BaseModel):
    period: str
    payment_amount: int
    total_owed: int
    onboarding_owed: int
    interest_owed: int
    principal_owed: int
    is_partial_payment: bool
    is_full_payment: bool
    preview: PaymentPreviewDetail | None = None


class ForfeitureRiskResponse(BaseModel):
    loan_id: str
    days_overdue: int
    days_until_forfeiture: int | None = None
    urgency: str
    payoff: PayoffResponse


class AtRiskResponse(BaseModel):
    items: list[ForfeitureRiskResponse]
    total: int
    forfeiture_enabled: bool
    forfeiture_threshold: int


class ProcessForfeituresResponse(BaseModel):
    processed: int
    forfeited_ids: list[str]
    message: str


class ForfeitureSettingsResponse(BaseModel):
    forfeiture_enabled: bool
    forfeiture_days_threshold: int
