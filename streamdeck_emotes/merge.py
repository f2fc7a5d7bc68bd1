"""Merging freshly generated pages with manifests already on disk.

Regenerating a profile must not wipe buttons a user added by hand. Positions
produced by the layout always win; positions that only exist in the persisted
manifest are carried over untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from .errors import MalformedManifestError
from .models import Page, PersistedButton, Position

LOG = logging.getLogger("streamdeck_emotes.merge")


@dataclass(frozen=True)
class PersistedPage:
    """The ``Actions`` of a previously written manifest, keyed by position."""

    actions: Mapping[Position, PersistedButton]


def load_persisted_page(raw: Any) -> PersistedPage:
    """Parse a decoded ``manifest.json`` document into a :class:`PersistedPage`.

    A document that is not an object, or that has no ``Actions`` object, is
    rejected. Individual entries with an unparsable key or a non-object
    payload are skipped with a warning so the remaining actions still survive
    a merge.
    """

    if not isinstance(raw, Mapping):
        raise MalformedManifestError("manifest is not a JSON object")

    actions = raw.get("Actions")
    if not isinstance(actions, Mapping):
        raise MalformedManifestError("manifest has no `Actions` object")

    parsed: Dict[Position, PersistedButton] = {}
    for key, payload in actions.items():
        try:
            position = Position.parse(key)
        except ValueError:
            LOG.warning("skipping persisted action with invalid position %r", key)
            continue
        if not isinstance(payload, Mapping):
            LOG.warning("skipping persisted action at %s: not a JSON object", key)
            continue
        parsed[position] = PersistedButton(payload=dict(payload))

    return PersistedPage(actions=parsed)


def merge_page(fresh: Page, persisted: Optional[PersistedPage]) -> Page:
    """Add persisted-only positions to *fresh*, never overriding fresh content."""

    if persisted is None:
        return fresh

    buttons = dict(fresh.buttons)
    for position, button in persisted.actions.items():
        if position in buttons:
            continue
        if not fresh.grid.contains(position):
            LOG.debug("page %s: dropping persisted action outside the grid at %s", fresh.uuid, position)
            continue
        buttons[position] = button

    if len(buttons) == len(fresh.buttons):
        return fresh
    return replace(fresh, buttons=buttons)


def merge_with_manifest(fresh: Page, raw: Any) -> Page:
    """Merge against a decoded manifest, falling back to *fresh* if it is unusable."""

    try:
        persisted = load_persisted_page(raw)
    except MalformedManifestError as exc:
        LOG.warning("page %s: ignoring existing manifest (%s); writing fresh layout only", fresh.uuid, exc)
        return fresh
    return merge_page(fresh, persisted)
