"""Tests for custom exception hierarchy."""

from loan_tracker.exceptions import (
    ConfigurationError,
    DuplicateEntityError,
    InvalidLoanError,
    InvalidPaymentError,
    LoanNotFoundError,
    LoanTrackerError,
    StorageError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_tracker_error_is_exception(self) -> None:
        assert isinstance(LoanTrackerError("test"), Exception)

    def test_loan_not_found_is_loan_tracker_error(self) -> None:
        assert isinstance(LoanNotFoundError("test"), LoanTrackerError)

    def test_duplicate_entity_is_loan_tracker_error(self) -> None:
        assert isinstance(DuplicateEntityError("test"), LoanTrackerError)

    def test_invalid_records_are_validation_errors(self) -> None:
        for err in (InvalidLoanError("test"), InvalidPaymentError("test")):
            assert isinstance(err, ValidationError)
            assert isinstance(err, LoanTrackerError)

    def test_configuration_error_is_loan_tracker_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanTrackerError)

    def test_storage_error_is_loan_tracker_error(self) -> None:
        assert isinstance(StorageError("test"), LoanTrackerError)

    def test_exception_message(self) -> None:
        err = LoanNotFoundError("Loan loan-001 not found")
        assert str(err) == "Loan loan-001 not found"
