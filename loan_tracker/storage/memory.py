"""In-process key/value storage for the loan collection."""

import logging
from typing import Iterable

from loan_tracker.config import DEFAULT_NAMESPACE
from loan_tracker.models.loan import Loan
from loan_tracker.storage.serialization import decode_loans, encode_loans

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Keep serialized collections in a dict keyed by namespace.

    Several instances may share one ``blobs`` dict, the way browser tabs
    share a key/value store.
    """

    def __init__(
        self,
        namespace: str = DEFAULT_NAMESPACE,
        blobs: dict[str, str] | None = None,
    ) -> None:
        self.namespace = namespace
        self.blobs = blobs if blobs is not None else {}

    def load(self) -> tuple[Loan, ...]:
        """Read the collection; absent or corrupt data yields an empty tuple."""
        return decode_loans(self.blobs.get(self.namespace))

    def save(self, loans: Iterable[Loan]) -> None:
        """Replace the stored collection with ``loans``."""
        loans = tuple(loans)
        self.blobs[self.namespace] = encode_loans(loans)
        logger.debug("Saved %d loans under %s", len(loans), self.namespace)
