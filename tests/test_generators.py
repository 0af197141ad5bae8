"""Tests for demo data generators."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from loan_tracker.config import TrackerConfig
from loan_tracker.engine.stats import compute_stats
from loan_tracker.exceptions import InvalidLoanError
from loan_tracker.generators import LoanGenerator
from loan_tracker.generators.loan import add_months
from loan_tracker.models import Loan
from loan_tracker.store.loan_book import is_year_month


class TestAddMonths:
    """Tests for add_months."""

    @pytest.mark.parametrize(
        "start, months, expected",
        [
            ("2024-01", 0, "2024-01"),
            ("2024-01", 1, "2024-02"),
            ("2024-11", 2, "2025-01"),
            ("2024-12", 13, "2026-01"),
        ],
    )
    def test_add_months(self, start: str, months: int, expected: str) -> None:
        assert add_months(start, months) == expected


class TestLoanGenerator:
    """Tests for LoanGenerator."""

    def test_generate_loan(self, seed: int) -> None:
        loan = LoanGenerator(seed=seed).generate()

        assert loan.loan_id
        assert loan.name.split(" Loan - ")[0] in LoanGenerator.LOAN_KINDS
        assert loan.total_amount > 0
        assert loan.monthly_emi > 0
        assert loan.tenure_months > 0
        assert is_year_month(loan.start_month)
        assert loan.payments == ()
        # EMI covers the principal within the tenure
        assert loan.monthly_emi * loan.tenure_months >= loan.total_amount

    def test_generate_batch_unique_ids(self, seed: int) -> None:
        loans = LoanGenerator(seed=seed).generate_batch(10)

        assert len(loans) == 10
        assert len({loan.loan_id for loan in loans}) == 10

    def test_seed_is_reproducible(self, seed: int) -> None:
        first = LoanGenerator(seed=seed).generate_batch(3)
        second = LoanGenerator(seed=seed).generate_batch(3)

        assert [(l.loan_id, l.name, l.total_amount, l.monthly_emi) for l in first] == [
            (l.loan_id, l.name, l.total_amount, l.monthly_emi) for l in second
        ]

    def test_generate_payments(self, seed: int) -> None:
        gen = LoanGenerator(seed=seed)
        loan = gen.generate()

        payments = gen.generate_payments(loan, 5)

        assert len(payments) == 5
        assert [p.date for p in payments] == [add_months(loan.start_month, i) for i in range(5)]
        assert all(p.amount > 0 for p in payments)
        assert all(p.amount in (loan.monthly_emi, loan.monthly_emi * 2, (loan.monthly_emi / 2).quantize(Decimal("1"))) for p in payments)

    def test_payments_for_legacy_loan_start_this_month(self, seed: int) -> None:
        """A decoded loan with no start month or creation time is scheduled from now."""
        loan = Loan(
            loan_id="legacy",
            name="Legacy",
            total_amount=Decimal("12000"),
            monthly_emi=Decimal("1000"),
            start_month=None,
            created_at=None,
        )
        this_month = datetime.now(timezone.utc).strftime("%Y-%m")

        payments = LoanGenerator(seed=seed).generate_payments(loan, 3)

        assert payments[0].date in (this_month, add_months(this_month, 1))
        assert [p.date for p in payments] == [add_months(payments[0].date, i) for i in range(3)]
        assert all(p.created_at is not None for p in payments)

    def test_payments_ignore_malformed_start_month(self, seed: int, created_at: datetime) -> None:
        loan = Loan(
            loan_id="legacy",
            name="Legacy",
            total_amount=Decimal("12000"),
            monthly_emi=Decimal("1000"),
            start_month="January",
            created_at=created_at,
        )

        payments = LoanGenerator(seed=seed).generate_payments(loan, 2)

        assert [p.date for p in payments] == ["2024-01", "2024-02"]

    @pytest.mark.parametrize("emi", [Decimal("0"), None, "abc"])
    def test_payments_need_positive_emi(self, seed: int, emi) -> None:
        loan = Loan(loan_id="legacy", name="Legacy", total_amount=Decimal("12000"), monthly_emi=emi)

        with pytest.raises(InvalidLoanError, match="EMI"):
            LoanGenerator(seed=seed).generate_payments(loan, 1)

    def test_part_payment_of_small_emi_stays_positive(self, seed: int, created_at: datetime) -> None:
        loan = Loan(
            loan_id="tiny",
            name="Tiny",
            total_amount=Decimal("10"),
            monthly_emi=Decimal("1"),
            start_month="2024-01",
            created_at=created_at,
        )

        payments = LoanGenerator(seed=seed).generate_payments(loan, 40)

        assert all(p.amount in (Decimal("1"), Decimal("2")) for p in payments)

    def test_from_config_uses_seed(self) -> None:
        config = TrackerConfig(seed=7)

        first = LoanGenerator.from_config(config).generate_batch(3)
        second = LoanGenerator(seed=7).generate_batch(3)

        assert [l.loan_id for l in first] == [l.loan_id for l in second]

    def test_generate_book(self, seed: int) -> None:
        book = LoanGenerator(seed=seed).generate_book(8)

        assert len(book) == 8
        for loan in book:
            assert loan.payment_count <= loan.tenure_months
            stats = compute_stats(loan)
            assert (loan.completed_at is not None) == stats.is_completed

    def test_generate_book_max_payments(self, seed: int) -> None:
        book = LoanGenerator(seed=seed).generate_book(5, max_payments=2)

        assert all(loan.payment_count <= 2 for loan in book)

    def test_generate_book_summary(self, seed: int) -> None:
        book = LoanGenerator(seed=seed).generate_book(6)
        summary = book.summary()

        assert summary.loan_count == 6
        assert summary.total_borrowed == sum(loan.total_amount for loan in book)
