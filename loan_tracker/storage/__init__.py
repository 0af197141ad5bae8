"""Persistence for the loan collection."""

from loan_tracker.storage.json_file import JsonFileStorage
from loan_tracker.storage.memory import MemoryStorage

__all__ = ["JsonFileStorage", "MemoryStorage"]
