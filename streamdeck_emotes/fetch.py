"""Concurrent download of emote images."""

from __future__ import annotations

import concurrent.futures
import logging
import urllib.request
from typing import List, Sequence, Tuple

from .errors import FetchError
from .models import Emote, EmoteImage

LOG = logging.getLogger("streamdeck_emotes.fetch")

USER_AGENT = "streamdeck-emotes/0.1 (+https://localhost) Python-urllib"


def download_image(url: str, timeout: float = 30.0) -> bytes:
    """Fetch *url* and return the response body."""

    req = urllib.request.Request(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "image/*,*/*"},
        method="GET",
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        status = getattr(resp, "status", 200)
        if not 200 <= status < 300:
            raise OSError(f"received non-success code {status} from URL {url}")
        return resp.read()


def _fetch_one(emote: Emote, timeout: float) -> EmoteImage:
    LOG.info("downloading image name=%s url=%s", emote.name, emote.url)
    return EmoteImage(emote=emote, data=download_image(emote.url, timeout))


def fetch_images(
    emotes: Sequence[Emote],
    max_workers: int = 8,
    timeout: float = 30.0,
) -> List[EmoteImage]:
    """Download every emote image concurrently, preserving input order.

    All downloads run to completion before any failure is reported; if one or
    more failed, a single :class:`FetchError` lists them all and chains the
    first one.
    """

    if not emotes:
        return []

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=max(1, min(max_workers, len(emotes))),
        thread_name_prefix="emote-fetch",
    ) as executor:
        futures = [executor.submit(_fetch_one, emote, timeout) for emote in emotes]
        concurrent.futures.wait(futures)

    images: List[EmoteImage] = []
    failures: List[Tuple[Emote, BaseException]] = []
    for emote, future in zip(emotes, futures):
        exc = future.exception()
        if exc is not None:
            LOG.error("failed to download %s from %s: %s", emote.name, emote.url, exc)
            failures.append((emote, exc))
        else:
            images.append(future.result())

    if failures:
        first_emote, first_exc = failures[0]
        raise FetchError(
            f"failed to load images: {len(failures)} of {len(emotes)} download(s) failed "
            f"(first: {first_emote.name} from {first_emote.url}: {first_exc})",
            failures,
        ) from first_exc

    return images
