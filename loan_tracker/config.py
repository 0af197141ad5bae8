"""Configuration management for loan-tracker."""

from dataclasses import dataclass, field
from pathlib import Path

from loan_tracker.engine.emi_share import DEFAULT_PALETTE
from loan_tracker.exceptions import ConfigurationError

DEFAULT_NAMESPACE = "smart-loan-tracker-v1"


@dataclass
class StorageConfig:
    """Where the loan collection is persisted."""

    directory: Path = field(default_factory=lambda: Path("data"))
    namespace: str = DEFAULT_NAMESPACE
    pretty_json: bool = False

    @property
    def file_path(self) -> Path:
        """Path of the JSON document holding the collection."""
        return self.directory / f"{self.namespace}.json"


@dataclass
class ChartConfig:
    """EMI share chart configuration."""

    palette: tuple[str, ...] = DEFAULT_PALETTE


@dataclass
class TrackerConfig:
    """Main configuration for loan-tracker."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        """Create config from environment variables."""
        import json
        import os

        namespace = os.getenv("LOAN_TRACKER_NAMESPACE", DEFAULT_NAMESPACE)
        if not namespace.strip():
            raise ConfigurationError("LOAN_TRACKER_NAMESPACE must not be blank")

        storage = StorageConfig(
            directory=Path(os.getenv("LOAN_TRACKER_DATA_DIR", "data")),
            namespace=namespace,
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        palette_str = os.getenv("EMI_PALETTE")
        if palette_str:
            try:
                palette = json.loads(palette_str)
            except ValueError as e:
                raise ConfigurationError(f"EMI_PALETTE is not valid JSON: {e}") from e
            if not isinstance(palette, list) or not palette:
                raise ConfigurationError("EMI_PALETTE must be a non-empty JSON list")
            chart = ChartConfig(palette=tuple(str(color) for color in palette))
        else:
            chart = ChartConfig()

        seed_str = os.getenv("SEED")
        try:
            seed = int(seed_str) if seed_str else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed_str!r}") from e

        log_format = os.getenv("LOG_FORMAT", "standard").lower()
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            storage=storage,
            chart=chart,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )
