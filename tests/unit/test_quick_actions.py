"""Unit tests for ``QuickAction``."""

from __future__ import annotations

import pytest

from product_clean.quick_actions import QuickAction


def test_four_actions_with_exact_instructions() -> None:
    assert [action.value for action in QuickAction] == [
        "Remove background and make it clean white",
        "Add soft studio lighting and subtle shadows",
        "Clean up the product, remove dust, and enhance colors",
        "Place this product in a high-end minimalist lifestyle setting",
    ]


def test_labels_use_first_two_words() -> None:
    assert QuickAction.REMOVE_BACKGROUND.label == "Remove background..."
    assert QuickAction.POLISH.label == "Clean up..."


def test_slug_lookup() -> None:
    assert QuickAction.from_slug("studio-lighting") is QuickAction.STUDIO_LIGHTING

    with pytest.raises(ValueError):
        QuickAction.from_slug("sepia")
