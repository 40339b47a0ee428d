"""Forfeiture risk for overdue loans.

Computes risk only. Marking a loan forfeited (and persisting it) belongs to
the caller's batch job.
"""

import logging
from datetime import date, datetime
from typing import Iterable

from src.config import Settings
from src.engine.payoff import add_days, as_date, calculate_payoff, days_between
from src.models.loan import PawnLoan
from src.models.results import ForfeitureRisk, RiskUrgency

logger = logging.getLogger(__name__)


def classify_urgency(
    days_until_forfeiture: int | None,
    days_overdue: int,
    settings: Settings,
) -> RiskUrgency:
    if days_until_forfeiture is not None:
        if days_until_forfeiture <= settings.at_risk_critical_days:
            return RiskUrgency.CRITICAL
        if days_until_forfeiture <= settings.at_risk_high_days:
            return RiskUrgency.HIGH
    if days_overdue > settings.at_risk_medium_overdue_days:
        return RiskUrgency.MEDIUM
    return RiskUrgency.LOW


def assess_forfeiture_risk(
    loan: PawnLoan,
    reference_date: date | datetime,
    settings: Settings,
) -> ForfeitureRisk:
    threshold = settings.forfeiture_threshold
    days_overdue = max(0, days_between(loan.next_payment_due_date, reference_date))
    days_until = max(0, threshold - days_overdue) if threshold is not None else None

    return ForfeitureRisk(
        loan_id=loan.loan_id,
        days_overdue=days_overdue,
        days_until_forfeiture=days_until,
        urgency=classify_urgency(days_until, days_overdue, settings),
        payoff=calculate_payoff(loan, reference_date, threshold),
    )


def scan_at_risk(
    loans: Iterable[PawnLoan],
    reference_date: date | datetime,
    settings: Settings,
) -> list[ForfeitureRisk]:
    """Risk for every open past-due loan, most overdue first."""
    today = as_date(reference_date)
    overdue = sorted(
        (loan for loan in loans if loan.is_open and as_date(loan.next_payment_due_date) < today),
        key=lambda loan: as_date(loan.next_payment_due_date),
    )
    return [assess_forfeiture_risk(loan, today, settings) for loan in overdue]


def select_for_forfeiture(
    loans: Iterable[PawnLoan],
    reference_date: date | datetime,
    threshold_days: int | None,
) -> list[str]:
    """Ids of open loans whose due date is more than threshold_days ago."""
    if threshold_days is None:
        return []
    cutoff = add_days(reference_date, -threshold_days)
    selected = [
        loan.loan_id
        for loan in loans
        if loan.is_open and as_date(loan.next_payment_due_date) < cutoff
    ]
    if selected:
        logger.info("%d loans past the %d-day forfeiture threshold", len(selected), threshold_days)
    return selected
