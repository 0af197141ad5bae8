"""Pure loan-state computations."""

from loan_tracker.engine.emi_share import DEFAULT_PALETTE, partition
from loan_tracker.engine.portfolio import aggregate
from loan_tracker.engine.stats import compute_stats

__all__ = ["DEFAULT_PALETTE", "aggregate", "compute_stats", "partition"]
