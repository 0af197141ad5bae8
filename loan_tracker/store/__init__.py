"""Loan collection snapshots and edit operations."""

from loan_tracker.store.loan_book import LoanBook, new_loan, new_payment

__all__ = ["LoanBook", "new_loan", "new_payment"]
