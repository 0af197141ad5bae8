"""Application entry point wiring config, storage and logging together."""

from loan_tracker.config import TrackerConfig
from loan_tracker.generators.loan import LoanGenerator
from loan_tracker.logging import get_logger, setup_logging
from loan_tracker.models.stats import EmiPartition
from loan_tracker.storage.json_file import JsonFileStorage
from loan_tracker.storage.memory import MemoryStorage
from loan_tracker.store.loan_book import LoanBook

logger = get_logger(__name__)


class LoanTracker:
    """Load, edit and save a loan book under one configuration.

    Parameters
    ----------
    storage : JsonFileStorage | MemoryStorage
        Where the collection is persisted.
    config : TrackerConfig | None
        Chart palette and generator seed (default: ``TrackerConfig()``).
    """

    def __init__(
        self,
        storage: JsonFileStorage | MemoryStorage,
        config: TrackerConfig | None = None,
    ) -> None:
        self.storage = storage
        self.config = config or TrackerConfig()

    @classmethod
    def from_config(cls, config: TrackerConfig) -> "LoanTracker":
        """Configure logging and open file storage as ``config`` says."""
        setup_logging(level=config.log_level, format_type=config.log_format)
        storage = JsonFileStorage.from_config(config.storage)
        logger.info("Using loan document %s", storage.file_path)
        return cls(storage, config)

    @classmethod
    def from_env(cls) -> "LoanTracker":
        return cls.from_config(TrackerConfig.from_env())

    def load(self) -> LoanBook:
        """Read the stored collection into a book."""
        book = LoanBook(self.storage.load())
        logger.debug("Loaded book with %d loans", len(book))
        return book

    def save(self, book: LoanBook) -> None:
        """Replace the stored collection with ``book``."""
        self.storage.save(book.loans)

    def emi_partition(self, book: LoanBook) -> EmiPartition:
        """EMI pie slices colored with the configured palette."""
        return book.emi_partition(config=self.config.chart)

    def seed_demo(self, num_loans: int = 5) -> LoanBook:
        """Store a generated demo book, replacing whatever was saved."""
        book = LoanGenerator.from_config(self.config).generate_book(num_loans)
        self.save(book)
        logger.info("Seeded %d demo loans", len(book))
        return book
