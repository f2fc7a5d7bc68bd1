"""Page layout for Stream Deck emote profiles.

Layout happens in two passes that are kept separate:

1. **Content** – ``paginate`` folds the ordered buttons into fixed-capacity
   slot lists, reserving column 0 of every row, and ``slots_to_positions``
   turns each slot list into a sparse position map.
2. **Navigation** – ``link_pages`` injects a Back button at ``(0, 0)`` on every
   page but the first and a Forward button at ``(0, height - 1)`` on every page
   but the last.

``layout_pages`` composes both and assigns page identifiers.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import reduce
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from .actions import back_button, forward_button
from .identifiers import page_uuids
from .models import Button, GridModel, Page, Position

LOG = logging.getLogger("streamdeck_emotes.layout")

Slots = Tuple[Optional[Button], ...]
_Accumulator = Tuple[Tuple[Slots, ...], Slots]


# ---------------------------------------------------------------------------
# Content pass
# ---------------------------------------------------------------------------


def _place_step(grid: GridModel) -> Callable[[_Accumulator, Button], _Accumulator]:
    capacity = grid.capacity

    def step(acc: _Accumulator, button: Button) -> _Accumulator:
        finished, current = acc
        if len(current) >= capacity:
            finished, current = finished + (current,), ()
        if len(current) % grid.width == 0:
            current = current + (None,)
        return finished, current + (button,)

    return step


def paginate(buttons: Iterable[Button], grid: GridModel) -> List[Slots]:
    """Split *buttons* into per-page slot lists; ``None`` marks a reserved cell."""

    finished, current = reduce(_place_step(grid), buttons, ((), ()))
    if current:
        finished = finished + (current,)
    return list(finished)


def slots_to_positions(slots: Sequence[Optional[Button]], width: int) -> Dict[Position, Button]:
    return {
        Position(index % width, index // width): button
        for index, button in enumerate(slots)
        if button is not None
    }


# ---------------------------------------------------------------------------
# Navigation pass
# ---------------------------------------------------------------------------


def link_pages(pages: Sequence[Page]) -> List[Page]:
    """Return copies of *pages* chained together with Back/Forward buttons."""

    linked: List[Page] = []
    last = len(pages) - 1

    for idx, page in enumerate(pages):
        buttons = dict(page.buttons)
        if idx > 0:
            buttons[Position(0, 0)] = back_button()
        if idx < last:
            buttons[Position(0, page.grid.height - 1)] = forward_button(pages[idx + 1].uuid)
        linked.append(replace(page, buttons=buttons))

    return linked


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def layout_pages(
    buttons: Iterable[Button],
    grid: GridModel,
    root_uuid: Optional[UUID],
    config_name: str,
) -> List[Page]:
    """Lay out *buttons* on as many pages of *grid* as needed.

    The first page is identified by *root_uuid* when given; every other page
    gets an identifier derived from *config_name* and its index.
    """

    slot_pages = paginate(buttons, grid)
    uuids = page_uuids(config_name, len(slot_pages), root_uuid)

    pages = [
        Page(uuid=page_uuid, index=idx, grid=grid, buttons=slots_to_positions(slots, grid.width))
        for idx, (page_uuid, slots) in enumerate(zip(uuids, slot_pages))
    ]
    LOG.debug("laid out %d page(s) on a %dx%d grid", len(pages), grid.width, grid.height)
    return link_pages(pages)
