"""Split the combined monthly EMI into pie chart slices."""

from typing import Iterable, Sequence

from loan_tracker.engine.coercion import ZERO, to_amount
from loan_tracker.exceptions import ConfigurationError
from loan_tracker.models.loan import Loan
from loan_tracker.models.stats import EmiPartition, EmiSlice

FULL_CIRCLE = 360.0

DEFAULT_PALETTE: tuple[str, ...] = (
    "#6366f1",
    "#22c55e",
    "#f97316",
    "#eab308",
    "#06b6d4",
    "#f472b6",
)


def partition(
    loans: Iterable[Loan],
    palette: Sequence[str] = DEFAULT_PALETTE,
) -> EmiPartition:
    """Build contiguous pie slices proportional to each loan's EMI.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loans in display order. Loans without a positive EMI are skipped.
    palette : Sequence[str]
        Colors assigned by slice position, wrapping around when there are
        more slices than colors.

    Returns
    -------
    EmiPartition
        Slices starting at 0 degrees in collection order, or an empty
        partition when no loan has a positive EMI.

    Raises
    ------
    ConfigurationError
        If ``palette`` is empty.
    """
    if not palette:
        raise ConfigurationError("EMI palette must contain at least one color")

    qualifying = [(loan, to_amount(loan.monthly_emi)) for loan in loans]
    qualifying = [(loan, emi) for loan, emi in qualifying if emi > 0]
    total_emi = sum((emi for _, emi in qualifying), ZERO)
    if not qualifying or total_emi == 0:
        return EmiPartition()

    slices = []
    current_angle = 0.0
    for position, (loan, emi) in enumerate(qualifying):
        ratio = float(emi / total_emi)
        end = current_angle + ratio * FULL_CIRCLE
        slices.append(
            EmiSlice(
                loan_id=loan.loan_id,
                name=loan.name,
                value=emi,
                ratio=ratio,
                color=palette[position % len(palette)],
                start=current_angle,
                end=end,
            )
        )
        current_angle = end

    return EmiPartition(slices=tuple(slices), total_emi=total_emi)
