"""Loan and payment records."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Payment:
    """A single EMI payment recorded against a loan."""

    payment_id: str
    amount: Decimal
    date: str  # Month the payment applies to (YYYY-MM)
    note: str = ""
    created_at: datetime | None = None


@dataclass(frozen=True)
class Loan:
    """Personal loan with its payment history.

    ``tenure_months == 0`` means the tenure is unknown and
    ``monthly_emi == 0`` means there is no fixed installment.
    Payments are kept most-recent-first.
    """

    loan_id: str
    name: str
    total_amount: Decimal
    tenure_months: int = 0
    monthly_emi: Decimal = Decimal("0")
    start_month: str | None = None  # YYYY-MM
    created_at: datetime | None = None
    completed_at: datetime | None = None
    payments: tuple[Payment, ...] = field(default_factory=tuple)

    @property
    def payment_count(self) -> int:
        """Number of recorded payments."""
        return len(self.payments)

    @property
    def is_marked_completed(self) -> bool:
        """Whether the loan has been stamped as completed."""
        return self.completed_at is not None
