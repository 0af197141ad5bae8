"""Demo loan portfolios for trying out the tracker."""

import logging
import math
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from loan_tracker.config import TrackerConfig
from loan_tracker.engine.coercion import to_amount
from loan_tracker.exceptions import InvalidLoanError
from loan_tracker.generators.base import BaseGenerator
from loan_tracker.models.loan import Loan, Payment
from loan_tracker.store.loan_book import LoanBook, is_year_month, new_loan, new_payment

logger = logging.getLogger(__name__)


def add_months(year_month: str, months: int) -> str:
    """Shift a ``YYYY-MM`` marker by a number of months."""
    year, month = (int(part) for part in year_month.split("-"))
    index = year * 12 + (month - 1) + months
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


class LoanGenerator(BaseGenerator):
    """Generate personal loans with plausible payment histories."""

    # Principal range (thousands) and typical tenures by loan kind
    LOAN_KINDS = {
        "Home": ((1500, 8000), [120, 180, 240]),
        "Car": ((300, 1500), [36, 48, 60]),
        "Personal": ((50, 1000), [12, 24, 36, 48]),
        "Education": ((200, 2000), [36, 60, 84]),
        "Two-Wheeler": ((50, 200), [12, 18, 24]),
        "Gold": ((20, 500), [6, 12]),
    }

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "LoanGenerator":
        """Create a generator seeded from ``TrackerConfig.seed``."""
        return cls(seed=config.seed)

    def generate(self) -> Loan:
        """Generate a loan without payments.

        Returns
        -------
        Loan
            Loan with an EMI that covers the principal over its tenure.
        """
        kind = random.choice(list(self.LOAN_KINDS))
        (low, high), tenures = self.LOAN_KINDS[kind]

        total = Decimal(random.randint(low, high) * 1000)
        tenure = random.choice(tenures)
        # Round the EMI up to the next hundred
        emi = Decimal(math.ceil(total / tenure / 100) * 100)

        created_at = self.fake.date_time_between(
            start_date="-3y", end_date="-30d", tzinfo=timezone.utc
        )

        return new_loan(
            name=f"{kind} Loan - {self.fake.company()}",
            total_amount=total,
            monthly_emi=emi,
            tenure_months=tenure,
            start_month=created_at.strftime("%Y-%m"),
            loan_id=self.fake.uuid4(),
            created_at=created_at,
        )

    def generate_payments(self, loan: Loan, count: int) -> list[Payment]:
        """Generate ``count`` monthly payments for a loan, oldest first.

        Most payments match the EMI; a few are part-payments or
        prepayments with a note. Loans without a usable start month or
        creation time are scheduled from the current month.

        Raises
        ------
        InvalidLoanError
            If the loan has no positive EMI to pay.
        """
        emi = to_amount(loan.monthly_emi)
        if emi <= 0:
            raise InvalidLoanError(f"Loan {loan.loan_id} has no positive EMI to pay")

        base_time = loan.created_at or datetime.now(timezone.utc)
        if is_year_month(loan.start_month):
            start_month = loan.start_month
        else:
            start_month = base_time.strftime("%Y-%m")

        payments = []
        for i in range(count):
            roll = random.random()
            if roll < 0.08:
                amount = emi * 2
                note = "Prepayment"
            elif roll < 0.15:
                half = (emi / 2).quantize(Decimal("1"))
                amount = half if half > 0 else emi
                note = "Part payment"
            else:
                amount = emi
                note = ""

            payments.append(
                new_payment(
                    amount=amount,
                    date=add_months(start_month, i),
                    note=note,
                    payment_id=self.fake.uuid4(),
                    created_at=base_time + timedelta(days=30 * (i + 1)),
                )
            )
        return payments

    def generate_batch(self, count: int) -> list[Loan]:
        """Generate ``count`` loans without payments."""
        return [self.generate() for _ in range(count)]

    def generate_book(self, num_loans: int, max_payments: int | None = None) -> LoanBook:
        """Generate a book of loans, each with part of its tenure paid.

        Payments go through ``LoanBook.add_payment`` so completed loans are
        stamped exactly as they would be by user edits.

        Parameters
        ----------
        num_loans : int
            Number of loans to generate.
        max_payments : int | None
            Upper bound on payments per loan (default: the loan's tenure).

        Returns
        -------
        LoanBook
            Book with the most recently generated loan first.
        """
        book = LoanBook()
        for _ in range(num_loans):
            loan = self.generate()
            book = book.add_loan(loan)

            limit = loan.tenure_months if max_payments is None else max_payments
            count = random.randint(0, max(limit, 0))
            for payment in self.generate_payments(loan, count):
                book = book.add_payment(loan.loan_id, payment, now=payment.created_at)

        logger.info("Generated demo book with %d loans", len(book))
        return book
