"""Per-loan financial status."""

import math
from decimal import Decimal

from loan_tracker.engine.coercion import ZERO, to_amount, to_months
from loan_tracker.models.loan import Loan
from loan_tracker.models.stats import LoanStats


def compute_stats(loan: Loan) -> LoanStats:
    """Derive paid, remaining and completion state from a loan.

    Parameters
    ----------
    loan : Loan
        Loan snapshot. Invalid numeric fields are read as zero.

    Returns
    -------
    LoanStats
        Derived status. ``remaining`` is never negative.
    """
    total = to_amount(loan.total_amount)
    emi = to_amount(loan.monthly_emi)
    payments = loan.payments if isinstance(loan.payments, (list, tuple)) else ()
    paid = sum((to_amount(p.amount) for p in payments), ZERO)
    remaining = max(total - paid, ZERO)

    tenure = to_months(loan.tenure_months)
    payment_count = len(payments)

    return LoanStats(
        total=total,
        emi=emi,
        paid=paid,
        remaining=remaining,
        remaining_months=estimate_remaining_months(remaining, emi, tenure, payment_count),
        is_completed=remaining <= 0 or (tenure > 0 and payment_count >= tenure),
        payment_count=payment_count,
    )


def estimate_remaining_months(
    remaining: Decimal,
    emi: Decimal,
    tenure: int,
    payment_count: int,
) -> int:
    """Reconcile the balance/EMI estimate with the tenure/payment-count estimate.

    The smaller estimate wins, except that a zero estimate defers to the
    other one. The result is zero only when both estimates are zero.
    """
    by_emi = math.ceil(remaining / emi) if emi > 0 else 0
    if tenure <= 0:
        return by_emi
    by_tenure = max(tenure - payment_count, 0)
    return min(by_emi or by_tenure, by_tenure or by_emi)
