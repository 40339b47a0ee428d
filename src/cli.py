"""CLI for quoting a pawn loan payoff.

Usage:
    python -m src.cli --principal 100.00 --rate 0.20 --fee 5.00 --start 2025-01-01 --as-of 2025-02-14
    python -m src.cli --principal 100 --rate 0.20 --start 2025-01-01 --as-of 2025-03-01 \\
        --fee-paid --cycle-start 2025-01-31 --pay 10.00
"""

import argparse
import sys
from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.config import settings
from src.engine.money import format_cents, parse_currency
from src.engine.origination import originate_loan
from src.engine.payoff import ONBOARDING_DAYS, add_days, calculate_payoff
from src.engine.preview import describe_option, preview_payment_options


def print_payoff(state) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Payoff on loan day {state.loan_day} ({state.period.value})")
    print(f"{'=' * 60}")
    print(f"  Daily rate:       {format_cents(state.daily_interest_rate)}/day")
    print(f"  First month:      {format_cents(state.onboarding_owed)}")
    print(f"  Interest:         {format_cents(state.interest_owed)}")
    print(f"  Principal:        {format_cents(state.principal_owed)}")
    print(f"  Total owed:       {format_cents(state.total_owed)}")
    print(f"  Next due:         {state.next_payment_due_date.isoformat()}")
    print(f"  Term ends:        {state.term_end_date.isoformat()}")
    if state.days_until_forfeiture is not None:
        print(f"  Days past due:    {state.days_past_due}")
        print(f"  Forfeiture in:    {state.days_until_forfeiture} days")
    print()


def print_preview(preview, as_of: date) -> None:
    print(f"  Paying {format_cents(preview.payment_amount)} covers {preview.days_covered} days")
    if preview.can_pay_full:
        print(f"  Pays off the loan (full amount {format_cents(preview.full_payment_amount)})")
    for label, applied in (("A", preview.option_a), ("B", preview.option_b)):
        print(f"  [{label}] {describe_option(applied, as_of)}")
        if not preview.requires_choice:
            break
    print()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Pawn loan payoff quote")
    parser.add_argument("--principal", required=True, help="Loan amount in dollars")
    parser.add_argument("--rate", required=True, help="Monthly interest rate (e.g. 0.20)")
    parser.add_argument("--fee", default="0", help="Storage fee in dollars (default: 0)")
    parser.add_argument("--start", required=True, type=date.fromisoformat, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--as-of", type=date.fromisoformat, default=date.today(), help="Quote date")
    parser.add_argument("--remaining", help="Principal remaining in dollars (default: full principal)")
    parser.add_argument("--fee-paid", action="store_true", help="First month already paid")
    parser.add_argument("--cycle-start", type=date.fromisoformat, help="Current interest cycle start")
    parser.add_argument("--due", type=date.fromisoformat, help="Next payment due date")
    parser.add_argument("--pay", help="Preview a payment of this many dollars")

    args = parser.parse_args(argv)

    try:
        loan = originate_loan(
            parse_currency(args.principal), Decimal(args.rate), parse_currency(args.fee), args.start
        )
        changes: dict = {}
        if args.remaining is not None:
            changes["principal_remaining"] = parse_currency(args.remaining)
        if args.fee_paid:
            changes.update(
                onboarding_fee_paid=True,
                onboarding_fee_remaining=0,
                current_cycle_start=add_days(args.start, ONBOARDING_DAYS),
                next_payment_due_date=add_days(args.start, ONBOARDING_DAYS * 2),
            )
        if args.cycle_start:
            changes["current_cycle_start"] = args.cycle_start
        if args.due:
            changes["next_payment_due_date"] = args.due
        loan = replace(loan, **changes)

        print_payoff(calculate_payoff(loan, args.as_of, settings.forfeiture_threshold))
        if args.pay:
            print_preview(preview_payment_options(loan, parse_currency(args.pay), args.as_of), args.as_of)
    except (ValueError, ArithmeticError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
