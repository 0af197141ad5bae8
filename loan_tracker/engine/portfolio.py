"""Portfolio-wide totals for the dashboard."""

from typing import Iterable

from loan_tracker.engine.coercion import ZERO
from loan_tracker.engine.stats import compute_stats
from loan_tracker.models.loan import Loan
from loan_tracker.models.stats import PortfolioSummary


def aggregate(loans: Iterable[Loan]) -> PortfolioSummary:
    """Sum borrowed, paid and remaining amounts and count loans by state.

    Every loan lands in exactly one of ``active_count`` or
    ``completed_count``. An empty collection yields all zeros.
    """
    total_borrowed = ZERO
    total_paid = ZERO
    total_remaining = ZERO
    active_count = 0
    completed_count = 0

    for loan in loans:
        stats = compute_stats(loan)
        total_borrowed += stats.total
        total_paid += stats.paid
        total_remaining += stats.remaining
        if stats.is_completed:
            completed_count += 1
        else:
            active_count += 1

    return PortfolioSummary(
        total_borrowed=total_borrowed,
        total_paid=total_paid,
        total_remaining=total_remaining,
        active_count=active_count,
        completed_count=completed_count,
    )
