"""Before/after comparison view with a draggable vertical divider.

The slider holds a single number, the divider position as a percentage of the
container width. Pointer samples are converted into that percentage against the
container bounds current at the time of the sample, so a resized container needs
no special handling. The renderer composes both images for any position: the
"after" image fills the frame, the "before" image is clipped to the left of the
divider.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageOps

from product_clean.payload import ImagePayload

logger = logging.getLogger(__name__)

MIN_POSITION: float = 0.0
MAX_POSITION: float = 100.0
INITIAL_POSITION: float = 50.0

BACKGROUND_COLOR = (255, 255, 255)
DIVIDER_COLOR = (255, 255, 255)
DIVIDER_WIDTH = 4


def clamp(value: float, minimum: float = MIN_POSITION, maximum: float = MAX_POSITION) -> float:
    if not math.isfinite(value):
        raise ValueError(f"Expected a finite number, got {value!r}.")
    return min(max(value, minimum), maximum)


@dataclass(slots=True, frozen=True)
class ContainerBounds:
    """Bounding box of the comparison container, in the pointer's coordinate space."""

    left: float
    width: float


def position_for(pointer_x: float, bounds: ContainerBounds) -> Optional[float]:
    """Return the clamped divider percentage for ``pointer_x``, or ``None`` when it cannot be computed.

    A zero-width container or a non-finite coordinate gives ``None``.
    """

    if bounds.width <= 0:
        return None
    raw = ((pointer_x - bounds.left) / bounds.width) * 100
    if not math.isfinite(raw):
        return None
    return clamp(raw)


@dataclass(slots=True, frozen=True)
class ComparisonLayout:
    """Where to clip the "before" image and draw the divider, as percentages of the width."""

    clip_width_percent: float
    divider_left_percent: float

    def clip_width_px(self, container_width: int) -> int:
        return round(container_width * self.clip_width_percent / 100)

    def divider_x_px(self, container_width: int) -> int:
        return round(container_width * self.divider_left_percent / 100)


class ComparisonSlider:
    """Divider state driven by mouse and touch samples."""

    def __init__(self, position: float = INITIAL_POSITION) -> None:
        self.position = clamp(position)

    def update_position(self, pointer_x: float, bounds: ContainerBounds) -> float:
        position = position_for(pointer_x, bounds)
        if position is None:
            logger.debug("Ignoring pointer sample %r for container %s", pointer_x, bounds)
        else:
            self.position = position
        return self.position

    def press(self, pointer_x: float, bounds: ContainerBounds) -> float:
        """Primary button or finger down: the divider jumps to the pointer even without a drag."""

        return self.update_position(pointer_x, bounds)

    def move(self, pointer_x: float, bounds: ContainerBounds, primary_down: bool) -> float:
        """Mouse move; follows the pointer only while the primary button is held."""

        if primary_down:
            self.update_position(pointer_x, bounds)
        return self.position

    def touch_move(self, touches_x: Sequence[float], bounds: ContainerBounds) -> float:
        """Touch move; the first active touch drives the divider."""

        if touches_x:
            self.update_position(touches_x[0], bounds)
        return self.position

    def layout(self) -> ComparisonLayout:
        return ComparisonLayout(
            clip_width_percent=self.position,
            divider_left_percent=self.position,
        )


# ---------------------------------------------------------------------------
# Rendering


def _decode(payload: ImagePayload) -> Image.Image:
    with Image.open(io.BytesIO(payload.data)) as image:
        image.load()
        return image.convert("RGBA")


def _fit(image: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Letterbox ``image`` onto a white canvas of ``size`` without cropping it."""

    fitted = ImageOps.contain(image, size)
    canvas = Image.new("RGB", size, BACKGROUND_COLOR)
    offset = ((size[0] - fitted.width) // 2, (size[1] - fitted.height) // 2)
    canvas.paste(fitted, offset, fitted)
    return canvas


def render_comparison(
    before: ImagePayload,
    after: ImagePayload,
    position: float = INITIAL_POSITION,
    size: Optional[Tuple[int, int]] = None,
) -> Image.Image:
    """Compose the comparison frame for a divider at ``position`` percent.

    ``size`` defaults to the dimensions of the "after" image.
    """

    after_image = _decode(after)
    before_image = _decode(before)
    size = size or after_image.size
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"Comparison size must be positive, got {size}.")

    layout = ComparisonSlider(position).layout()

    frame = _fit(after_image, size)
    clip_width = layout.clip_width_px(size[0])
    if clip_width > 0:
        before_frame = _fit(before_image, size)
        frame.paste(before_frame.crop((0, 0, clip_width, size[1])), (0, 0))

    divider_x = layout.divider_x_px(size[0])
    left = clamp(divider_x - DIVIDER_WIDTH // 2, 0, size[0] - DIVIDER_WIDTH)
    ImageDraw.Draw(frame).rectangle(
        (left, 0, left + DIVIDER_WIDTH - 1, size[1] - 1),
        fill=DIVIDER_COLOR,
    )
    return frame


def render_comparison_payload(
    before: ImagePayload,
    after: ImagePayload,
    position: float = INITIAL_POSITION,
    size: Optional[Tuple[int, int]] = None,
) -> ImagePayload:
    """Same as :func:`render_comparison`, encoded as a PNG payload."""

    buffer = io.BytesIO()
    render_comparison(before, after, position, size).save(buffer, format="PNG")
    return ImagePayload.from_bytes(buffer.getvalue(), "image/png")
