"""Canned instructions offered as one-click shortcuts."""

from __future__ import annotations

from enum import Enum


class QuickAction(str, Enum):
    REMOVE_BACKGROUND = "Remove background and make it clean white"
    STUDIO_LIGHTING = "Add soft studio lighting and subtle shadows"
    POLISH = "Clean up the product, remove dust, and enhance colors"
    LIFESTYLE = "Place this product in a high-end minimalist lifestyle setting"

    @property
    def label(self) -> str:
        """Short button caption: the first two words followed by an ellipsis."""

        return " ".join(self.value.split(" ")[:2]) + "..."

    @property
    def slug(self) -> str:
        return self.name.lower().replace("_", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "QuickAction":
        for action in cls:
            if action.slug == slug:
                return action
        raise ValueError(f"Unknown quick action '{slug}'. Choose one of: {', '.join(a.slug for a in cls)}")
