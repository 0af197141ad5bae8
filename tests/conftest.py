"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from loan_tracker.models import Loan, Payment


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def created_at() -> datetime:
    """Fixed creation timestamp."""
    return datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def car_loan(created_at: datetime) -> Loan:
    """Twelve-month loan with no payments yet."""
    return Loan(
        loan_id="loan-test-001",
        name="Car Loan",
        total_amount=Decimal("120000"),
        tenure_months=12,
        monthly_emi=Decimal("10000"),
        start_month="2024-01",
        created_at=created_at,
    )


@pytest.fixture
def make_payments():
    """Build ``count`` payments of ``amount`` each, newest first."""

    def _make(amount: str | int, count: int) -> tuple[Payment, ...]:
        return tuple(
            Payment(
                payment_id=f"pay-{i:03d}",
                amount=Decimal(str(amount)),
                date=f"2024-{i % 12 + 1:02d}",
            )
            for i in reversed(range(count))
        )

    return _make
