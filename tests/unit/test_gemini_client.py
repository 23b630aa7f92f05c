"""Unit tests for the Gemini edit client, with the SDK client faked out."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from google.genai import types as genai_types

from product_clean.config import Settings
from product_clean.errors import CredentialError, RemoteServiceError
from product_clean.gemini_client import GeminiEditClient, build_user_content, extract_image


def make_response(*parts: genai_types.Part) -> genai_types.GenerateContentResponse:
    return genai_types.GenerateContentResponse(
        candidates=[
            genai_types.Candidate(content=genai_types.Content(role="model", parts=list(parts)))
        ]
    )


class FakeModels:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: List[Dict[str, Any]] = []

    def generate_content(self, **kwargs: Any) -> Any:
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_client(models: FakeModels, api_key: str | None = "test-key") -> tuple[GeminiEditClient, List[str]]:
    keys: List[str] = []

    def factory(key: str) -> SimpleNamespace:
        keys.append(key)
        return SimpleNamespace(models=models)

    client = GeminiEditClient(Settings(api_key=api_key), client_factory=factory)
    return client, keys


def test_build_user_content_wraps_instruction(red_png) -> None:
    content = build_user_content(image=red_png, instruction="Remove background")

    assert content.role == "user"
    assert content.parts[0].inline_data.mime_type == "image/png"
    assert content.parts[0].inline_data.data == red_png.data
    assert content.parts[1].text == (
        "You are a professional product photo editor. Remove background. "
        "Please provide the resulting edited image."
    )


def test_submit_edit_returns_inline_image(red_png, blue_png) -> None:
    response = make_response(
        genai_types.Part(text="Here you go"),
        genai_types.Part(inline_data=genai_types.Blob(mime_type="image/jpeg", data=blue_png.data)),
    )
    models = FakeModels(response=response)
    client, keys = make_client(models)

    edited = client.submit_edit(red_png, "Remove background")

    assert edited.mime_type == "image/jpeg"
    assert edited.data == blue_png.data
    assert keys == ["test-key"]
    assert models.requests[0]["model"] == "gemini-2.5-flash-image"


def test_missing_api_key_raises_credential_error(red_png) -> None:
    models = FakeModels()
    client, keys = make_client(models, api_key=None)

    with pytest.raises(CredentialError) as excinfo:
        client.submit_edit(red_png, "Remove background")

    assert excinfo.value.message == "API Key not found"
    assert keys == []
    assert models.requests == []


def test_sdk_errors_become_remote_service_errors(red_png) -> None:
    client, _ = make_client(FakeModels(error=ConnectionError("network down")))

    with pytest.raises(RemoteServiceError, match="network down"):
        client.submit_edit(red_png, "Remove background")


def test_response_without_candidates_is_an_error() -> None:
    with pytest.raises(RemoteServiceError, match="No image data returned from AI"):
        extract_image(genai_types.GenerateContentResponse(candidates=[]))


def test_text_only_response_is_an_error(caplog: pytest.LogCaptureFixture) -> None:
    response = make_response(genai_types.Part(text="I cannot edit this image."))

    with caplog.at_level(logging.WARNING, logger="product_clean.gemini_client"):
        with pytest.raises(RemoteServiceError, match="did not contain an image"):
            extract_image(response)

    assert "I cannot edit this image." in caplog.text
