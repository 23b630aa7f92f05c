"""Test configuration for pytest."""

from __future__ import annotations

import io
import os
from typing import Callable, List, Optional, Tuple

import pytest
from PIL import Image

from product_clean.errors import RemoteServiceError
from product_clean.payload import ImagePayload


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "ai: real API tests that may cost money")
    config.addinivalue_line("markers", "slow: tests expected to run longer than ~1 second")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    run_ai = os.getenv("RUN_AI_TESTS") == "1"
    skip_marker = pytest.mark.skip(reason="Set RUN_AI_TESTS=1 to run AI integration tests.")

    if run_ai:
        return

    for item in items:
        if "ai" in item.keywords:
            item.add_marker(skip_marker)


def solid_png(color: Tuple[int, int, int], size: Tuple[int, int] = (100, 20)) -> ImagePayload:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return ImagePayload.from_bytes(buffer.getvalue(), "image/png")


class FakeEditClient:
    """Records calls and answers with a fixed payload or raises a fixed error."""

    def __init__(
        self,
        result: Optional[ImagePayload] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[ImagePayload, str]] = []
        self.on_call: Optional[Callable[[], None]] = None

    def submit_edit(self, image: ImagePayload, instruction: str) -> ImagePayload:
        self.calls.append((image, instruction))
        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


@pytest.fixture
def red_png() -> ImagePayload:
    return solid_png((255, 0, 0))


@pytest.fixture
def blue_png() -> ImagePayload:
    return solid_png((0, 0, 255))


@pytest.fixture
def fake_client(blue_png: ImagePayload) -> FakeEditClient:
    return FakeEditClient(result=blue_png)


@pytest.fixture
def failing_client() -> FakeEditClient:
    return FakeEditClient(error=RemoteServiceError("quota exceeded"))
