"""Edit session: the photo being worked on, its latest edit, the prompt and the history.

A view subscribes once and receives a fresh :class:`SessionSnapshot` after every
change, so it can redraw from the snapshot alone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from product_clean.config import Settings
from product_clean.errors import GENERIC_FAILURE_MESSAGE, RemoteServiceError, ValidationError
from product_clean.gemini_client import EditClient
from product_clean.history import EditHistory, EditRecord
from product_clean.payload import ImagePayload
from product_clean.quick_actions import QuickAction
from product_clean.status import IDLE, Failed, InProgress, ProcessingStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SessionSnapshot:
    original: Optional[ImagePayload]
    edited: Optional[ImagePayload]
    prompt: str
    status: ProcessingStatus
    history: tuple[EditRecord, ...]

    @property
    def can_submit(self) -> bool:
        return self.original is not None and not self.status.is_processing


Observer = Callable[[SessionSnapshot], None]


class EditSession:
    """Single user session coordinating uploads, edit requests and history."""

    def __init__(self, client: EditClient, settings: Optional[Settings] = None) -> None:
        self.client = client
        self.settings = settings if settings is not None else Settings()
        self.original: Optional[ImagePayload] = None
        self.edited: Optional[ImagePayload] = None
        self.prompt: str = ""
        self.status: ProcessingStatus = IDLE
        self.history = EditHistory(self.settings.history_limit)
        self._observer: Optional[Observer] = None

    # -----------------------------------------------------------------------
    # Observer

    def subscribe(self, observer: Observer) -> None:
        """Register the view; it replaces any previous observer and is sent the current state."""

        self._observer = observer
        self._publish()

    def close(self) -> None:
        self._observer = None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            original=self.original,
            edited=self.edited,
            prompt=self.prompt,
            status=self.status,
            history=self.history.records(),
        )

    def _publish(self) -> None:
        if self._observer is not None:
            self._observer(self.snapshot())

    # -----------------------------------------------------------------------
    # Operations

    def set_original(self, image: ImagePayload) -> None:
        """Start over with a new photo."""

        self.original = image
        self.edited = None
        self.prompt = ""
        self.status = IDLE
        logger.info("New original image (%s, %d bytes)", image.mime_type, len(image.data))
        self._publish()

    def set_prompt(self, text: str) -> None:
        self.prompt = text
        self._publish()

    def request_edit(self, instruction: Optional[str] = None) -> Optional[EditRecord]:
        """Run one edit with ``instruction``, or with the pending prompt when none is given.

        Returns the new history record, or ``None`` when nothing was sent or the edit
        failed. Failures never propagate: they land in ``status`` as ``Failed``.
        """

        active = instruction or self.prompt
        if self.original is None or not active.strip():
            logger.debug("Edit request ignored: missing image or instruction")
            return None
        if self.status.is_processing:
            logger.debug("Edit request ignored: another edit is in progress")
            return None

        original = self.original
        self.status = InProgress(self.settings.processing_message)

        try:
            self._publish()
            edited = self.client.submit_edit(original, active)
        except RemoteServiceError as exc:
            return self._fail(exc.message)
        except Exception as exc:
            logger.exception("Unexpected error while editing")
            return self._fail(str(exc))

        record = EditRecord(original=original, edited=edited, instruction=active)
        self.edited = edited
        evicted = self.history.push(record)
        if evicted is not None:
            logger.debug("History full, evicted record %s", evicted.id)
        self.status = IDLE
        logger.info("Edit %s completed", record.id)
        self._publish()
        return record

    def apply_quick_action(self, action: QuickAction) -> Optional[EditRecord]:
        return self.request_edit(action.value)

    def _fail(self, message: str) -> None:
        message = message or GENERIC_FAILURE_MESSAGE
        logger.warning("Edit failed: %s", message)
        self.status = Failed(message)
        self._publish()
        return None

    def select_history_entry(self, record_id: str) -> Optional[EditRecord]:
        record = self.history.find(record_id)
        if record is None:
            return None

        self.original = record.original
        self.edited = record.edited
        self.prompt = record.instruction
        self._publish()
        return record

    def discard_edit(self) -> None:
        """Hide the current result so the original can be edited again."""

        self.edited = None
        self._publish()

    def reset(self) -> None:
        """Clear the working photo, result, prompt and status. History is kept."""

        self.original = None
        self.edited = None
        self.prompt = ""
        self.status = IDLE
        self._publish()

    def export_edited(self, path: Union[str, Path, None] = None) -> Path:
        """Save the current edit, by default as ``edited-product.png``."""

        if self.edited is None:
            raise ValidationError("There is no edited image to download yet.")
        target = self.edited.write_to(path or self.settings.download_file_name)
        logger.info("Saved edited image to %s", target)
        return target
