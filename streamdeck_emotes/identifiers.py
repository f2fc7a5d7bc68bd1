"""Deterministic page identifiers."""

from __future__ import annotations

import uuid
from typing import List, Optional

PAGE_NAMESPACE_URL = "https://github.com/walfie/streamdeck-youtube-emotes"


def derive_page_uuid(name: str, page_index: int) -> uuid.UUID:
    """Return the name-based UUID of page *page_index* of profile *name*."""

    return uuid.uuid5(uuid.NAMESPACE_URL, f"{PAGE_NAMESPACE_URL}#{name}_page{page_index}")


def page_uuids(name: str, count: int, root_uuid: Optional[uuid.UUID] = None) -> List[uuid.UUID]:
    """Identifiers for a chain of *count* pages; *root_uuid* replaces page 0."""

    uuids = [derive_page_uuid(name, index) for index in range(count)]
    if uuids and root_uuid is not None:
        uuids[0] = root_uuid
    return uuids
