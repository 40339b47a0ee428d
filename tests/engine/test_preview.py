import pytest

from src.engine.allocation import apply_payment
from src.engine.preview import describe_option, preview_payment_options
from src.models.loan import CycleOption, LoanPeriod
from tests.factories import START, day


class TestPreviewPaymentOptions:
    def test_partial_interest_payment(self, interest_loan):
        # 30 days owed = 2010; pay $10
        preview = preview_payment_options(interest_loan, 1000, day(61))
        assert preview.payment_amount == 1000
        assert preview.period is LoanPeriod.INTEREST_BEARING
        assert preview.days_covered == 14
        assert preview.requires_choice
        assert not preview.can_pay_full
        assert preview.full_payment_amount == 12010

        assert preview.option_a.cycle_option is CycleOption.NEW_CYCLE
        assert preview.option_a.remaining_owed == 0
        assert preview.option_b.cycle_option is CycleOption.KEEP_DUE_DATE
        assert preview.option_b.new_due_date == interest_loan.next_payment_due_date
        assert preview.option_b.remaining_owed == 1010

    @pytest.mark.parametrize("amount", [1, 500, 1000, 2009])
    def test_matches_apply(self, interest_loan, amount):
        preview = preview_payment_options(interest_loan, amount, day(61))
        assert preview.option_a == apply_payment(interest_loan, amount, "A", day(61))
        assert preview.option_b == apply_payment(interest_loan, amount, "B", day(61))

    def test_can_pay_full(self, interest_loan):
        preview = preview_payment_options(interest_loan, 50000, day(45))
        assert preview.can_pay_full
        assert not preview.requires_choice
        # Full payment: both options collapse to the same allocation
        assert preview.option_a == preview.option_b
        assert preview.option_a.is_redeemed
        assert preview.option_a.unapplied == 50000 - preview.full_payment_amount

    def test_onboarding_has_no_choice(self, new_loan):
        preview = preview_payment_options(new_loan, 1500, START)
        assert not preview.requires_choice
        assert preview.option_a == preview.option_b
        assert preview.option_a.remaining_owed == 1000

    def test_does_not_mutate(self, interest_loan):
        before = interest_loan
        preview_payment_options(interest_loan, 1000, day(61))
        assert interest_loan == before
        assert interest_loan.interest_carried == 0


class TestDescribeOption:
    def test_new_cycle(self, interest_loan):
        preview = preview_payment_options(interest_loan, 1000, day(61))
        assert describe_option(preview.option_a, day(61)) == "New cycle: next payment due in 30 days"

    def test_keep_due_date(self, interest_loan):
        preview = preview_payment_options(interest_loan, 1000, day(61))
        assert (
            describe_option(preview.option_b, day(61))
            == "Keep original due date, only owe $10.10 next time"
        )

    def test_first_month_partial(self, new_loan):
        applied = apply_payment(new_loan, 1500, None, START)
        assert describe_option(applied, START) == "First month: $10.00 still owed"

    def test_principal_only(self, interest_loan):
        applied = apply_payment(interest_loan, 4000, None, day(460))
        assert "$60.00 principal remaining" in describe_option(applied, day(460))
