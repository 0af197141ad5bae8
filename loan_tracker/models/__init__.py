"""Domain models for loan tracking."""

from loan_tracker.models.loan import Loan, Payment
from loan_tracker.models.stats import EmiPartition, EmiSlice, LoanStats, PortfolioSummary

__all__ = [
    "EmiPartition",
    "EmiSlice",
    "Loan",
    "LoanStats",
    "Payment",
    "PortfolioSummary",
]
