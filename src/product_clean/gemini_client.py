"""Send a product photo and an instruction to Gemini and decode the edited image.

One call per edit, no retries: any failure is raised as ``RemoteServiceError`` so
the session can show it and the user can try again.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Protocol

from google import genai
from google.genai import types as genai_types

from product_clean.config import Settings, build_edit_prompt
from product_clean.errors import CredentialError, RemoteServiceError
from product_clean.payload import ImagePayload

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


class EditClient(Protocol):
    def submit_edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        ...


def _default_client_factory(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


# ---------------------------------------------------------------------------
# Request construction & response parsing helpers


def build_user_content(*, image: ImagePayload, instruction: str) -> genai_types.Content:
    """Assemble a single ``user`` content block: the photo first, then the wrapped instruction."""

    return genai_types.Content(
        role="user",
        parts=[
            genai_types.Part(
                inline_data=genai_types.Blob(
                    mime_type=image.mime_type,
                    data=image.data,
                )
            ),
            genai_types.Part(text=build_edit_prompt(instruction)),
        ],
    )


def extract_text_responses(response: Any) -> List[str]:
    """Collect any textual explanations returned by Gemini."""

    texts: List[str] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        if not content or not getattr(content, "parts", None):
            continue
        for part in content.parts:
            text = getattr(part, "text", None)
            if text:
                texts.append(text)
    return texts


def extract_image(response: Any) -> ImagePayload:
    """Return the first inline image of the first candidate."""

    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) if content else None
    if not parts:
        raise RemoteServiceError("No image data returned from AI")

    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline and getattr(inline, "data", None):
            mime_type = getattr(inline, "mime_type", None) or "image/png"
            return ImagePayload.from_bytes(inline.data, mime_type)

    texts = extract_text_responses(response)
    if texts:
        logger.warning("Gemini answered with text only: %s", " ".join(texts))
    raise RemoteServiceError("The AI response did not contain an image.")


# ---------------------------------------------------------------------------
# Client


class GeminiEditClient:
    """Edit client backed by the ``google-genai`` SDK."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client_factory: ClientFactory = _default_client_factory,
    ) -> None:
        self.settings = settings if settings is not None else Settings.from_env()
        self._client_factory = client_factory

    def submit_edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        api_key = self.settings.api_key
        if not api_key:
            raise CredentialError()

        user_content = build_user_content(image=image, instruction=instruction)
        logger.info(
            "Requesting edit from %s (%s, %d bytes)",
            self.settings.model_name,
            image.mime_type,
            len(image.data),
        )

        try:
            client = self._client_factory(api_key)
            response = client.models.generate_content(
                model=self.settings.model_name,
                contents=[user_content],
                config=genai_types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                    candidate_count=1,
                ),
            )
        except Exception as exc:
            logger.exception("Gemini API error")
            raise RemoteServiceError(str(exc)) from exc

        edited = extract_image(response)
        logger.info("Received edited image (%s, %d bytes)", edited.mime_type, len(edited.data))
        return edited
