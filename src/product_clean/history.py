"""Completed edits and the bounded, newest-first history that keeps them."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Iterator, List, Optional

from product_clean.config import HISTORY_LIMIT
from product_clean.payload import ImagePayload

_last_id = 0


def next_record_id() -> str:
    """Return a nanosecond timestamp id, bumped so it never repeats or goes backwards."""

    global _last_id
    _last_id = max(time.time_ns(), _last_id + 1)
    return str(_last_id)


@dataclass(slots=True, frozen=True)
class EditRecord:
    """One successful edit: the image sent, the image received and the instruction used."""

    original: ImagePayload
    edited: ImagePayload
    instruction: str
    id: str = field(default_factory=next_record_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class EditHistory:
    """Newest-first list of edit records capped at ``limit`` entries."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self._records: List[EditRecord] = []

    def push(self, record: EditRecord) -> Optional[EditRecord]:
        """Prepend ``record`` and return the entry evicted to stay within the limit, if any."""

        self._records.insert(0, record)
        if len(self._records) > self.limit:
            return self._records.pop()
        return None

    def find(self, record_id: str) -> Optional[EditRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def records(self) -> tuple[EditRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[EditRecord]:
        return iter(tuple(self._records))

    def __getitem__(self, index: int) -> EditRecord:
        return self._records[index]

    def __repr__(self) -> str:
        return f"EditHistory(len={len(self)}, limit={self.limit})"
