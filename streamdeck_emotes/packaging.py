"""Writing generated profiles into Stream Deck ``.sdProfile`` folders."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping
from uuid import UUID

from .errors import MalformedManifestError, ManifestWriteError
from .manifest import build_manifest
from .merge import merge_with_manifest
from .models import Page, Profile, STATE_IMAGE

LOG = logging.getLogger("streamdeck_emotes.packaging")

MANIFEST_NAME = "manifest.json"


def profile_dir_name(page_uuid: UUID) -> str:
    return f"{str(page_uuid).upper()}.sdProfile"


def page_directories(profile: Profile, out_dir: Path) -> List[Path]:
    """Return each page's folder; child pages nest under ``<parent>/Profiles``."""

    paths: List[Path] = []
    current = Path(out_dir)
    for idx, page in enumerate(profile.pages):
        if idx > 0:
            current = current / "Profiles"
        current = current / profile_dir_name(page.uuid)
        paths.append(current)
    return paths


def read_existing_manifest(path: Path) -> Any:
    """Load the manifest previously written to *path*."""

    try:
        with path.open("r", encoding="utf-8-sig") as handle:
            return json.load(handle)
    except ValueError as exc:
        raise MalformedManifestError(f"existing manifest {path} is not valid JSON") from exc


def write_json(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
    tmp.replace(path)


def _write_images(page: Page, page_dir: Path) -> int:
    written = 0
    for position, button in page.buttons.items():
        image = getattr(button, "image", None)
        if not image:
            continue
        image_dir = page_dir / position.key / "CustomImages"
        image_dir.mkdir(parents=True, exist_ok=True)
        (image_dir / STATE_IMAGE).write_bytes(image)
        written += 1
    return written


def write_page(profile: Profile, page: Page, page_dir: Path, merge_existing: bool = True) -> Page:
    """Write one page folder and return the page as written (after merging)."""

    manifest_path = page_dir / MANIFEST_NAME
    if merge_existing and manifest_path.exists():
        try:
            page = merge_with_manifest(page, read_existing_manifest(manifest_path))
        except MalformedManifestError as exc:
            LOG.warning("page %s: ignoring existing manifest (%s); writing fresh layout only", page.uuid, exc)

    manifest: Dict[str, Any] = build_manifest(page, profile.name, profile.device_uuid)
    try:
        page_dir.mkdir(parents=True, exist_ok=True)
        write_json(manifest_path, manifest)
        images = _write_images(page, page_dir)
    except OSError as exc:
        raise ManifestWriteError(f"failed to write page {page.index} to {page_dir}") from exc

    LOG.info("wrote page %d (%d action(s), %d image(s)) to %s", page.index, len(page.buttons), images, page_dir)
    return page


def write_profile(profile: Profile, out_dir: Path, merge_existing: bool = True) -> List[Path]:
    """Materialise every page of *profile* below *out_dir*.

    Pages are written root first; a failure aborts the remaining pages but
    leaves the ones already written in place.
    """

    paths = page_directories(profile, Path(out_dir))
    for page, page_dir in zip(profile.pages, paths):
        write_page(profile, page, page_dir, merge_existing=merge_existing)
    return paths
