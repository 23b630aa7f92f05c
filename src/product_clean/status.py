"""Edit lifecycle state: idle, running, or failed."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(slots=True, frozen=True)
class Idle:
    @property
    def is_processing(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class InProgress:
    message: str

    @property
    def is_processing(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Failed:
    message: str

    @property
    def is_processing(self) -> bool:
        return False


ProcessingStatus = Union[Idle, InProgress, Failed]

IDLE = Idle()
