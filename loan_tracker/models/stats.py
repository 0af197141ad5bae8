"""Derived values computed from loans."""

from dataclasses import dataclass, field
from decimal import Decimal


def _progress(paid: Decimal, total: Decimal) -> float:
    if total == 0:
        return 0.0
    return min(float(paid / total * 100), 100.0)


@dataclass(frozen=True)
class LoanStats:
    """Financial status of a single loan."""

    total: Decimal
    emi: Decimal
    paid: Decimal
    remaining: Decimal
    remaining_months: int
    is_completed: bool
    payment_count: int = 0

    @property
    def progress_percent(self) -> float:
        """Share of the principal already paid, capped at 100."""
        return _progress(self.paid, self.total)


@dataclass(frozen=True)
class PortfolioSummary:
    """Totals and counts across every tracked loan.

    ``total_remaining`` is the sum of per-loan remainders, so it can
    exceed ``total_borrowed - total_paid`` when a loan is overpaid.
    """

    total_borrowed: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_remaining: Decimal = Decimal("0")
    active_count: int = 0
    completed_count: int = 0

    @property
    def loan_count(self) -> int:
        return self.active_count + self.completed_count

    @property
    def outstanding(self) -> Decimal:
        """Borrowed minus paid at portfolio level, floored at zero."""
        return max(self.total_borrowed - self.total_paid, Decimal("0"))

    @property
    def progress_percent(self) -> float:
        return _progress(self.total_paid, self.total_borrowed)


@dataclass(frozen=True)
class EmiSlice:
    """One loan's share of the combined monthly EMI, as a pie segment."""

    loan_id: str
    name: str
    value: Decimal
    ratio: float
    color: str
    start: float  # degrees
    end: float  # degrees

    @property
    def span(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class EmiPartition:
    """Pie chart slices for every loan with a positive EMI."""

    slices: tuple[EmiSlice, ...] = field(default_factory=tuple)
    total_emi: Decimal = Decimal("0")

    @property
    def is_empty(self) -> bool:
        """True when the caller should render a placeholder instead of a chart."""
        return not self.slices
