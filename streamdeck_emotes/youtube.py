"""Extraction of membership emotes from a YouTube channel page."""

from __future__ import annotations

import json
import logging
from typing import Any, List

from .errors import EmoteParseError
from .models import Emote

LOG = logging.getLogger("streamdeck_emotes.youtube")

INITIAL_DATA_MARKER = "ytInitialData = "

_TABS = "/contents/twoColumnBrowseResultsRenderer/tabs"
_MEMBERSHIP_CONTENT = (
    "/tabRenderer/content/sectionListRenderer"
    "/contents/0/sponsorshipsManagementRenderer/content"
)
_PERK_IMAGES = (
    "/sponsorshipsExpandableMessageRenderer"
    "/expandableItems/0"
    "/sponsorshipsPerksRenderer/perks/0"
    "/sponsorshipsPerkRenderer/images"
)


def _pointer(value: Any, path: str) -> Any:
    """Resolve a JSON pointer (``/a/0/b``); return ``None`` when it is absent."""

    for part in path.strip("/").split("/"):
        if isinstance(value, dict):
            if part not in value:
                return None
            value = value[part]
        elif isinstance(value, list):
            try:
                value = value[int(part)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return value


def extract_initial_data(html: str) -> Any:
    start = html.find(INITIAL_DATA_MARKER)
    if start < 0:
        raise EmoteParseError("failed to find ytInitialData")
    start += len(INITIAL_DATA_MARKER)
    try:
        data, _ = json.JSONDecoder().raw_decode(html, start)
    except json.JSONDecodeError as exc:
        raise EmoteParseError("failed to parse ytInitialData") from exc
    return data


def _membership_images(data: Any) -> List[Any]:
    tabs = _pointer(data, _TABS)
    if not isinstance(tabs, list):
        raise EmoteParseError("failed to find tab data in ytInitialData")

    content = None
    for tab in tabs:
        if _pointer(tab, "/tabRenderer/title") == "Membership":
            content = _pointer(tab, _MEMBERSHIP_CONTENT)
            if content is not None:
                break
    if not isinstance(content, list):
        raise EmoteParseError("failed to find membership content")

    for item in content:
        images = _pointer(item, _PERK_IMAGES)
        if images is not None:
            if not isinstance(images, list):
                raise EmoteParseError("failed to parse images as array")
            return images
    raise EmoteParseError("failed to find emote images")


def parse_emotes(html: str) -> List[Emote]:
    """Return the ordered membership emotes embedded in *html*."""

    emotes: List[Emote] = []
    for idx, image in enumerate(_membership_images(extract_initial_data(html))):
        name = _pointer(image, "/accessibility/accessibilityData/label")
        if not isinstance(name, str):
            raise EmoteParseError(f"failed to find label of emote #{idx}")
        full_url = _pointer(image, "/thumbnails/0/url")
        if not isinstance(full_url, str):
            raise EmoteParseError(f"failed to find url of emote {name!r}")
        # drop the size suffix (``=w48-h48-c-k-nd``) to get the full image
        url = full_url.split("=", 1)[0]
        emotes.append(Emote(name=name, url=url))

    LOG.info("found %d emote(s) in page data", len(emotes))
    return emotes
