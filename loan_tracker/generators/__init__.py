"""Demo data generators."""

from loan_tracker.generators.loan import LoanGenerator

__all__ = ["LoanGenerator"]
