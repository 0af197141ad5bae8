"""Immutable loan collection with replace-on-write edits."""

import logging
import re
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterator, Sequence

from loan_tracker.config import ChartConfig
from loan_tracker.engine.coercion import to_amount, to_months
from loan_tracker.engine.emi_share import DEFAULT_PALETTE, partition
from loan_tracker.engine.portfolio import aggregate
from loan_tracker.engine.stats import compute_stats
from loan_tracker.exceptions import (
    DuplicateEntityError,
    InvalidLoanError,
    InvalidPaymentError,
    LoanNotFoundError,
)
from loan_tracker.models.loan import Loan, Payment
from loan_tracker.models.stats import EmiPartition, LoanStats, PortfolioSummary

logger = logging.getLogger(__name__)

_YEAR_MONTH = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


def is_year_month(value: Any) -> bool:
    """Check for a ``YYYY-MM`` month marker."""
    return isinstance(value, str) and _YEAR_MONTH.fullmatch(value) is not None


def new_loan(
    name: str,
    total_amount: Any,
    monthly_emi: Any,
    tenure_months: Any = None,
    start_month: str | None = None,
    *,
    loan_id: str | None = None,
    created_at: datetime | None = None,
) -> Loan:
    """Build a loan from user input.

    Parameters
    ----------
    name : str
        Display label; surrounding whitespace is stripped.
    total_amount : Any
        Principal. Must be a positive number.
    monthly_emi : Any
        Installment amount. Must be a positive number.
    tenure_months : Any
        Agreed tenure. Missing or unparsable values mean unknown (0).
    start_month : str | None
        Optional ``YYYY-MM`` marker.
    loan_id : str | None
        Identifier to use instead of a fresh one.
    created_at : datetime | None
        Creation timestamp (default: now, UTC).

    Returns
    -------
    Loan
        New loan with no payments.

    Raises
    ------
    InvalidLoanError
        If a required field is missing or out of range.
    """
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        raise InvalidLoanError("Loan name is required")

    total = to_amount(total_amount)
    if total <= 0:
        raise InvalidLoanError(f"Total amount must be positive, got {total_amount!r}")

    emi = to_amount(monthly_emi)
    if emi <= 0:
        raise InvalidLoanError(f"Monthly EMI must be positive, got {monthly_emi!r}")

    tenure = to_months(tenure_months)
    if tenure < 0:
        raise InvalidLoanError(f"Tenure cannot be negative, got {tenure_months!r}")

    if start_month is not None and start_month != "" and not is_year_month(start_month):
        raise InvalidLoanError(f"Start month must be YYYY-MM, got {start_month!r}")

    return Loan(
        loan_id=loan_id or _new_id(),
        name=name,
        total_amount=total,
        tenure_months=tenure,
        monthly_emi=emi,
        start_month=start_month or None,
        created_at=created_at or _now(),
    )


def new_payment(
    amount: Any,
    date: str,
    note: str | None = None,
    *,
    payment_id: str | None = None,
    created_at: datetime | None = None,
) -> Payment:
    """Build a payment from user input.

    Raises
    ------
    InvalidPaymentError
        If the amount is not positive or the month is not ``YYYY-MM``.
    """
    value = to_amount(amount)
    if value <= 0:
        raise InvalidPaymentError(f"Payment amount must be positive, got {amount!r}")
    if not is_year_month(date):
        raise InvalidPaymentError(f"Payment month must be YYYY-MM, got {date!r}")

    return Payment(
        payment_id=payment_id or _new_id(),
        amount=value,
        date=date,
        note=(note or "").strip(),
        created_at=created_at or _now(),
    )


@dataclass(frozen=True)
class LoanBook:
    """Snapshot of every tracked loan, newest first.

    Edits never modify a book in place; each returns a new book so views
    computed from an older snapshot stay consistent.
    """

    loans: tuple[Loan, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.loans, tuple):
            object.__setattr__(self, "loans", tuple(self.loans))

    def __len__(self) -> int:
        return len(self.loans)

    def __iter__(self) -> Iterator[Loan]:
        return iter(self.loans)

    def find(self, loan_id: str) -> Loan | None:
        """Return the loan with ``loan_id``, or None."""
        for loan in self.loans:
            if loan.loan_id == loan_id:
                return loan
        return None

    def get(self, loan_id: str) -> Loan:
        """Return the loan with ``loan_id``."""
        loan = self.find(loan_id)
        if loan is None:
            raise LoanNotFoundError(f"Loan {loan_id} not found")
        return loan

    def add_loan(self, loan: Loan) -> "LoanBook":
        """Return a new book with ``loan`` placed first."""
        if self.find(loan.loan_id) is not None:
            raise DuplicateEntityError(f"Loan {loan.loan_id} already exists")
        logger.debug("Adding loan %s (%s)", loan.loan_id, loan.name)
        return LoanBook(loans=(loan, *self.loans))

    def add_payment(
        self,
        loan_id: str,
        payment: Payment,
        now: datetime | None = None,
    ) -> "LoanBook":
        """Return a new book with ``payment`` prepended to a loan's history.

        The first time the loan is observed as completed, ``completed_at``
        is stamped with ``now``. An existing stamp is never replaced or
        cleared.
        """
        loan = self.get(loan_id)
        if any(p.payment_id == payment.payment_id for p in loan.payments):
            raise DuplicateEntityError(
                f"Payment {payment.payment_id} already recorded on loan {loan_id}"
            )

        updated = replace(loan, payments=(payment, *loan.payments))
        if updated.completed_at is None and compute_stats(updated).is_completed:
            updated = replace(updated, completed_at=now or _now())
            logger.info("Loan %s completed", loan_id, extra={"loan_id": loan_id})

        logger.debug("Recorded payment %s on loan %s", payment.payment_id, loan_id)
        return self._replace_loan(updated)

    def delete_loan(self, loan_id: str) -> "LoanBook":
        """Return a new book without the given loan."""
        self.get(loan_id)
        logger.debug("Deleting loan %s", loan_id)
        return LoanBook(loans=tuple(loan for loan in self.loans if loan.loan_id != loan_id))

    def resolve_selection(self, selected_id: str | None) -> str | None:
        """Keep a selection that still exists, else fall back to the first loan."""
        if selected_id is not None and self.find(selected_id) is not None:
            return selected_id
        return self.loans[0].loan_id if self.loans else None

    # Derived views
    def stats(self, loan_id: str) -> LoanStats:
        """Compute the status of one loan."""
        return compute_stats(self.get(loan_id))

    def summary(self) -> PortfolioSummary:
        """Aggregate totals across all loans."""
        return aggregate(self.loans)

    def emi_partition(
        self,
        palette: Sequence[str] | None = None,
        *,
        config: ChartConfig | None = None,
    ) -> EmiPartition:
        """EMI pie slices for all loans in book order.

        An explicit ``palette`` wins over ``config.palette``; with neither,
        the default palette is used.
        """
        if palette is None:
            palette = config.palette if config is not None else DEFAULT_PALETTE
        return partition(self.loans, palette)

    def _replace_loan(self, updated: Loan) -> "LoanBook":
        return LoanBook(
            loans=tuple(
                updated if loan.loan_id == updated.loan_id else loan for loan in self.loans
            )
        )
