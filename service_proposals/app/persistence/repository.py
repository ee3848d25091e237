"""
Append-only in-memory repository for processed quotes.

Records live for the lifetime of the process only.
"""

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, List, Tuple, TypeVar
from uuid import UUID

from shared.logging import get_logger


T = TypeVar("T")


@dataclass(frozen=True)
class Quote:
    """A processed quote kept for later listing."""

    id: UUID
    amount: Decimal
    customer: str


class InMemoryRepository(Generic[T]):
    """Thread-safe, append-only list of records."""

    def __init__(self, name: str = "records"):
        self.name = name
        self.logger = get_logger(f"proposals.repository.{name}")
        self._records: List[T] = []
        self._lock = threading.Lock()

    def save(self, record: T) -> None:
        with self._lock:
            self._records.append(record)
        self.logger.info("Record persisted", record_id=str(getattr(record, "id", "")))

    def list_all(self) -> Tuple[T, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)


class QuoteRepository(InMemoryRepository[Quote]):
    """Repository of :class:`Quote` records."""

    def __init__(self):
        super().__init__("quotes")
