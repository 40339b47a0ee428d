"""Loan routes. Stateless: the caller sends the stored snapshot with each request."""

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_settings
from src.api.schemas import (
    AppliedPaymentResponse,
    AtRiskRequest,
    AtRiskResponse,
    ForfeitureRiskResponse,
    LoanResponse,
    LoanSnapshot,
    OriginateRequest,
    PaymentPreviewDetail,
    PaymentPreviewRequest,
    PaymentPreviewResponse,
    PaymentRequest,
    PaymentResponse,
    PayoffRequest,
    PayoffResponse,
    ProcessForfeituresRequest,
    ProcessForfeituresResponse,
    RedeemRequest,
)
from src.config import Settings
from src.engine.allocation import apply_payment, redeem_in_full
from src.engine.errors import CycleOptionRequiredError
from src.engine.forfeiture import scan_at_risk, select_for_forfeiture
from src.engine.origination import originate_loan
from src.engine.payoff import calculate_payoff
from src.engine.preview import describe_option, preview_payment_options
from src.models.loan import CycleOption, PawnLoan
from src.models.results import AppliedPayment, PayoffState


router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


def _to_loan(snapshot: LoanSnapshot) -> PawnLoan:
    return PawnLoan(**snapshot.model_dump())


def _to_snapshot(loan: PawnLoan) -> LoanSnapshot:
    return LoanSnapshot(**asdict(loan))


def _payoff_response(state: PayoffState) -> PayoffResponse:
    data = asdict(state)
    data["period"] = state.period.value
    return PayoffResponse(**data)


def _applied_response(applied: AppliedPayment, as_of: date) -> AppliedPaymentResponse:
    option = applied.cycle_option
    return AppliedPaymentResponse(
        cycle_option=None if option is CycleOption.NOT_APPLICABLE else option.value,
        period=applied.period.value,
        loan_day=applied.loan_day,
        applied_to_onboarding=applied.applied_to_onboarding,
        applied_to_interest=applied.applied_to_interest,
        applied_to_principal=applied.applied_to_principal,
        unapplied=applied.unapplied,
        days_covered=applied.days_covered,
        new_due_date=applied.new_due_date,
        remaining_owed=applied.remaining_owed,
        is_full_payment=applied.is_full_payment,
        is_redeemed=applied.is_redeemed,
        description=describe_option(applied, as_of),
        loan=_to_snapshot(applied.loan),
    )


@router.post("/originate", response_model=LoanResponse, status_code=201)
async def originate(req: OriginateRequest, settings: Settings = Depends(get_settings)):
    """Write a new loan and return its day-1 snapshot."""
    start = req.start_date or date.today()
    try:
        loan = originate_loan(
            req.principal, req.monthly_interest_rate, req.onboarding_fee, start, loan_id=req.loan_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    state = calculate_payoff(loan, start, settings.forfeiture_threshold)
    return LoanResponse(loan=_to_snapshot(loan), payoff=_payoff_response(state))


@router.post("/payoff", response_model=PayoffResponse)
async def payoff(req: PayoffRequest, settings: Settings = Depends(get_settings)):
    """What is owed today, split by obligation."""
    try:
        state = calculate_payoff(
            _to_loan(req.loan), req.as_of or date.today(), settings.forfeiture_threshold
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _payoff_response(state)


@router.post("/payment-preview", response_model=PaymentPreviewResponse)
async def payment_preview(req: PaymentPreviewRequest):
    """Both cycle options for a partial interest payment, so the customer can choose."""
    as_of = req.as_of or date.today()
    loan = _to_loan(req.loan)
    try:
        state = calculate_payoff(loan, as_of)
        preview = preview_payment_options(loan, req.amount, as_of)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    detail = None
    if preview.requires_choice:
        detail = PaymentPreviewDetail(
            days_covered=preview.days_covered,
            option_a=_applied_response(preview.option_a, as_of),
            option_b=_applied_response(preview.option_b, as_of),
            can_pay_full=preview.can_pay_full,
            full_payment_amount=preview.full_payment_amount,
        )

    return PaymentPreviewResponse(
        period=state.period.value,
        payment_amount=req.amount,
        total_owed=state.total_owed,
        onboarding_owed=state.onboarding_owed,
        interest_owed=state.interest_owed,
        principal_owed=state.principal_owed,
        is_partial_payment=req.amount < state.total_owed,
        is_full_payment=req.amount >= state.total_owed,
        preview=detail,
    )


@router.post("/payment", response_model=PaymentResponse)
async def payment(req: PaymentRequest, settings: Settings = Depends(get_settings)):
    """Apply a payment; option A or B is required for partial interest payments."""
    as_of = req.as_of or date.today()
    try:
        applied = apply_payment(_to_loan(req.loan), req.amount, req.cycle_option, as_of)
    except CycleOptionRequiredError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    new_state = calculate_payoff(applied.loan, as_of, settings.forfeiture_threshold)
    return PaymentResponse(
        applied=_applied_response(applied, as_of),
        payoff=_payoff_response(new_state),
        notes=req.notes,
    )


@router.post("/redeem", response_model=PaymentResponse)
async def redeem(req: RedeemRequest):
    """Pay off the whole loan today."""
    as_of = req.as_of or date.today()
    try:
        applied = redeem_in_full(_to_loan(req.loan), as_of)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PaymentResponse(
        applied=_applied_response(applied, as_of),
        payoff=_payoff_response(calculate_payoff(applied.loan, as_of)),
        notes=req.notes or "Full redemption",
    )


@router.post("/at-risk", response_model=AtRiskResponse)
async def at_risk(req: AtRiskRequest, settings: Settings = Depends(get_settings)):
    """Past-due loans with urgency, most overdue first."""
    as_of = req.as_of or date.today()
    try:
        risks = scan_at_risk([_to_loan(s) for s in req.loans], as_of, settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    items = [
        ForfeitureRiskResponse(
            loan_id=r.loan_id,
            days_overdue=r.days_overdue,
            days_until_forfeiture=r.days_until_forfeiture,
            urgency=r.urgency.value,
            payoff=_payoff_response(r.payoff),
        )
        for r in risks
    ]
    return AtRiskResponse(
        items=items,
        total=len(items),
        forfeiture_enabled=settings.forfeiture_enabled,
        forfeiture_threshold=settings.forfeiture_days_threshold,
    )


@router.post("/process-forfeitures", response_model=ProcessForfeituresResponse)
async def process_forfeitures(req: ProcessForfeituresRequest, settings: Settings = Depends(get_settings)):
    """Ids of loans past the forfeiture threshold. The caller marks them forfeited."""
    if settings.forfeiture_threshold is None:
        return ProcessForfeituresResponse(
            processed=0, forfeited_ids=[], message="Forfeiture processing is disabled"
        )

    as_of = req.as_of or date.today()
    forfeited_ids = select_for_forfeiture(
        [_to_loan(s) for s in req.loans], as_of, settings.forfeiture_threshold
    )

    return ProcessForfeituresResponse(
        processed=len(forfeited_ids),
        forfeited_ids=forfeited_ids,
        message=f"Processed {len(forfeited_ids)} forfeited loans",
    )
