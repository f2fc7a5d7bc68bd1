"""Icon rendering helpers for navigation buttons."""

from __future__ import annotations

import io
from functools import lru_cache

from PIL import Image, ImageDraw

ICON_SIZE = 144
BACKGROUND = (24, 24, 28)
FOREGROUND = (235, 235, 245)
OUTLINE = (80, 80, 90)

DIRECTIONS = ("back", "forward")


@lru_cache(maxsize=None)
def render_nav_icon(direction: str) -> bytes:
    """Render a chevron tile for ``back`` or ``forward`` and return PNG bytes."""

    if direction not in DIRECTIONS:
        raise ValueError(f"unknown icon direction {direction!r}")

    width = height = ICON_SIZE
    image = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)
    draw.rounded_rectangle([(2, 2), (width - 3, height - 3)], radius=18, outline=OUTLINE, width=3)

    # chevron pointing left for back, right for forward
    inset = width // 4
    mid_y = height // 2
    tip_x, tail_x = (inset, width - inset) if direction == "back" else (width - inset, inset)
    points = [(tail_x, mid_y - inset), (tip_x, mid_y), (tail_x, mid_y + inset)]
    draw.line(points, fill=FOREGROUND, width=12, joint="curve")

    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()
