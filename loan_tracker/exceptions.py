"""Custom exception hierarchy for loan-tracker."""


class LoanTrackerError(Exception):
    """Base exception for all loan-tracker errors."""


class LoanNotFoundError(LoanTrackerError):
    """Raised when a referenced loan does not exist."""


class DuplicateEntityError(LoanTrackerError):
    """Raised when a loan or payment identifier is already in use."""


class ValidationError(LoanTrackerError):
    """Raised when a record is rejected before entering the collection."""


class InvalidLoanError(ValidationError):
    """Raised when a loan is missing a required field or has a bad value."""


class InvalidPaymentError(ValidationError):
    """Raised when a payment amount or month is not acceptable."""


class ConfigurationError(LoanTrackerError):
    """Raised when configuration is invalid or missing."""


class StorageError(LoanTrackerError):
    """Raised when the loan collection cannot be written."""
