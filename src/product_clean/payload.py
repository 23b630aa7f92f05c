"""Image payloads exchanged as self-describing data URIs."""

from __future__ import annotations

import base64
import binascii
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from product_clean.errors import ImagePayloadError, ValidationError

DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64"
DEFAULT_MIME_TYPE = "image/png"


@dataclass(slots=True, frozen=True)
class ImagePayload:
    """Raw image bytes together with their MIME type."""

    mime_type: str
    data: bytes

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> "ImagePayload":
        if not data:
            raise ImagePayloadError("Image payload is empty.")
        return cls(mime_type=mime_type or DEFAULT_MIME_TYPE, data=bytes(data))

    @classmethod
    def from_data_uri(cls, uri: str) -> "ImagePayload":
        """Decode ``data:<mime>;base64,<payload>``."""

        if not uri.startswith(DATA_URI_PREFIX) or "," not in uri:
            raise ImagePayloadError("Expected a data URI of the form 'data:<mime>;base64,<data>'.")

        header, encoded = uri[len(DATA_URI_PREFIX):].split(",", 1)
        if not header.endswith(BASE64_MARKER):
            raise ImagePayloadError("Only base64-encoded data URIs are supported.")

        mime_type = header[: -len(BASE64_MARKER)] or DEFAULT_MIME_TYPE
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ImagePayloadError(f"Data URI payload is not valid base64: {exc}") from exc

        return cls.from_bytes(data, mime_type)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ImagePayload":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.as_posix())
        if not mime_type:
            raise ValidationError(
                f"Could not infer a MIME type for '{path.name}'. Rename it with a known extension."
            )
        return cls.from_bytes(path.read_bytes(), mime_type)

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_uri(self) -> str:
        return f"{DATA_URI_PREFIX}{self.mime_type}{BASE64_MARKER},{self.base64_data}"

    @property
    def extension(self) -> str:
        return mimetypes.guess_extension(self.mime_type) or ".png"

    def write_to(self, path: Union[str, Path]) -> Path:
        """Write the raw bytes to ``path``, creating parent directories as needed."""

        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.data)
        return target

    def __repr__(self) -> str:
        return f"ImagePayload(mime_type={self.mime_type!r}, size={len(self.data)})"


def load_upload(path: Union[str, Path]) -> ImagePayload:
    """Read a single local file picked by the user and check it is an image.

    There is no size limit: oversized files are left to the remote service to reject.
    """

    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"Image '{path}' was not found.")

    payload = ImagePayload.from_path(path)
    if not payload.mime_type.startswith("image/"):
        raise ValidationError(f"'{path.name}' is not an image ({payload.mime_type}).")
    return payload
