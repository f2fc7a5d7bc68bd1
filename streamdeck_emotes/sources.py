# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
import os
import sys
import urllib.request
from pathlib import Path
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlparse

from .models import Emote

LOG = logging.getLogger("streamdeck_emotes.sources")

URL_SCHEMES = ("http", "https")
USER_AGENT = "streamdeck-emotes/0.1 (+https://localhost) Python-urllib"


def _is_url(s: str) -> bool:
    try:
        u = urlparse(s)
        return bool(u.scheme) and u.scheme.lower() in URL_SCHEMES
    except ValueError:
        return False


def _download_text(url: str, timeout: float) -> str:
    req = urllib.request.Request(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "text/html,*/*", "Accept-Language": "en"},
        method="GET",
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        charset = resp.headers.get_content_charset() or "utf-8"
        return resp.read().decode(charset, errors="replace")


def read_html(source: Optional[str], timeout: float = 30.0) -> str:
    """
    Return the channel page HTML from *source*:
      - ``None`` or ``-`` reads standard input
      - http(s) URLs are downloaded
      - anything else is treated as a local path (``~`` and env vars expanded)

    Raises:
        FileNotFoundError if a local path cannot be found.
        URLError/HTTPError on network failures.
    """
    if source in (None, "", "-"):
        LOG.info("sources: reading page HTML from stdin")
        return sys.stdin.read()

    if _is_url(source):
        LOG.info("sources: downloading page %s", source)
        return _download_text(source, timeout)

    path = Path(os.path.expanduser(os.path.expandvars(source))).resolve()
    if not path.exists():
        raise FileNotFoundError(f"source not found: {source}")
    LOG.info("sources: reading page HTML from %s", path)
    return path.read_text(encoding="utf-8")


def dedupe_emotes(emotes: Iterable[Emote]) -> List[Emote]:
    """Drop repeated emote names, keeping the first occurrence."""
    seen = set()
    unique: List[Emote] = []
    for emote in emotes:
        if emote.name in seen:
            LOG.debug("sources: skipping duplicate emote %s", emote.name)
            continue
        seen.add(emote.name)
        unique.append(emote)
    return unique


def apply_priority(
    emotes: Sequence[Emote],
    priority: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> List[Emote]:
    """Move *priority* names to the front (in that order) and drop *exclude* names."""
    excluded = set(exclude)
    kept = [emote for emote in emotes if emote.name not in excluded]
    by_name = {emote.name: emote for emote in kept}

    ordered: List[Emote] = []
    for name in priority:
        emote = by_name.pop(name, None)
        if emote is None:
            LOG.warning("sources: priority emote %r not found on the page", name)
            continue
        ordered.append(emote)
    ordered.extend(emote for emote in kept if emote.name in by_name)
    return ordered
