"""JSON file storage for the loan collection."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from loan_tracker.config import DEFAULT_NAMESPACE, StorageConfig
from loan_tracker.exceptions import StorageError
from loan_tracker.models.loan import Loan
from loan_tracker.storage.serialization import decode_loans, encode_loans

logger = logging.getLogger(__name__)


class JsonFileStorage:
    """Persist the loan collection as a single JSON document."""

    def __init__(
        self,
        directory: str | Path,
        namespace: str = DEFAULT_NAMESPACE,
        pretty: bool = False,
    ) -> None:
        """Initialize JSON file storage.

        Parameters
        ----------
        directory : str | Path
            Directory holding the document.
        namespace : str
            Document key; the file is ``<namespace>.json``.
        pretty : bool
            Pretty-print JSON output.
        """
        self.directory = Path(directory)
        self.namespace = namespace
        self.pretty = pretty

    @classmethod
    def from_config(cls, config: StorageConfig) -> "JsonFileStorage":
        """Create storage from a ``StorageConfig``."""
        return cls(config.directory, namespace=config.namespace, pretty=config.pretty_json)

    @property
    def file_path(self) -> Path:
        return self.directory / f"{self.namespace}.json"

    def load(self) -> tuple[Loan, ...]:
        """Read the collection.

        A missing, unreadable or corrupt document yields an empty tuple.
        """
        if not self.file_path.exists():
            logger.debug("No loan document at %s", self.file_path)
            return ()
        try:
            blob = self.file_path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s: %s", self.file_path, e)
            return ()

        loans = decode_loans(blob)
        logger.debug("Loaded %d loans from %s", len(loans), self.file_path)
        return loans

    def save(self, loans: Iterable[Loan]) -> None:
        """Replace the stored collection with ``loans``.

        The document is written to a temporary file and moved into place,
        so readers never observe a partial write.

        Raises
        ------
        StorageError
            If the document cannot be written.
        """
        loans = tuple(loans)
        blob = encode_loans(loans, pretty=self.pretty)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.namespace}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(blob)
                os.replace(tmp_name, self.file_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {self.file_path}: {e}") from e

        logger.debug(
            "Saved %d loans to %s", len(loans), self.file_path, extra={"namespace": self.namespace}
        )
