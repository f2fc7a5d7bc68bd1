"""End-to-end generation of a Stream Deck emote profile.

Stages
------
1. **Configuration** – load YAML, apply CLI overrides, validate the device
   model and resolve the grid.
2. **Emotes** – read the channel page, extract the membership emotes, drop
   duplicates and apply priority ordering.
3. **Images** – download every emote image concurrently; any failure aborts
   the run before layout starts.
4. **Layout** – turn images into content buttons and lay them out on linked
   pages.
5. **Write** – materialise the page folders, merging with manifests that are
   already on disk.

``run_pipeline`` is the single entry point used by the CLI.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from .actions import image_button
from .config import apply_cli_overrides, load_config_file, prepare_config
from .fetch import fetch_images
from .identifiers import derive_page_uuid
from .layout import layout_pages
from .models import Emote, EmoteImage, GridModel, Profile, grid_for_model
from .packaging import write_profile
from .sources import apply_priority, dedupe_emotes, read_html
from .youtube import parse_emotes

LOG = logging.getLogger("streamdeck_emotes.pipeline")

ProgressCb = Optional[Callable[[float, str], None]]


@dataclass(frozen=True)
class PipelineContext:
    """Validated settings for one generation run."""

    cfg: Dict[str, Any]
    grid: GridModel
    name: str
    prefix: str
    include_label: bool
    device_uuid: str
    root_uuid: uuid.UUID
    output_dir: Path
    merge_existing: bool


def _initialise_context(
    config: Optional[Dict[str, Any]],
    config_path: Optional[Path],
    cli_overrides: Optional[Mapping[str, Any]],
) -> PipelineContext:
    base_cfg = config or load_config_file(config_path)
    if cli_overrides:
        base_cfg = apply_cli_overrides(base_cfg, cli_overrides)
    cfg = prepare_config(base_cfg)

    profile = cfg["profile"]
    device = cfg["device"]
    root = profile["root_uuid"]
    name = profile["name"]
    return PipelineContext(
        cfg=cfg,
        grid=grid_for_model(device["model"], device["model_id"]),
        name=name,
        prefix=profile["prefix"],
        include_label=profile["include_label"],
        device_uuid=device["uuid"],
        root_uuid=uuid.UUID(root) if root else derive_page_uuid(name, 0),
        output_dir=Path(cfg["output"]["folder"]),
        merge_existing=cfg["output"]["merge_existing"],
    )


def _ordered_emotes(html: str, cfg: Mapping[str, Any]) -> List[Emote]:
    emotes = dedupe_emotes(parse_emotes(html))
    ordering = cfg.get("emotes") or {}
    return apply_priority(emotes, ordering.get("priority", []), ordering.get("exclude", []))


def build_profile(ctx: PipelineContext, images: List[EmoteImage]) -> Profile:
    """Lay out downloaded emote images as a linked chain of pages."""

    buttons = [image_button(image, ctx.prefix, ctx.include_label) for image in images]
    pages = layout_pages(buttons, ctx.grid, ctx.root_uuid, ctx.name)
    return Profile(name=ctx.name, device_uuid=ctx.device_uuid, grid=ctx.grid, pages=tuple(pages))


def run_pipeline(
    source: Optional[str],
    *,
    config: Optional[Dict[str, Any]] = None,
    config_path: Optional[Path] = None,
    cli_overrides: Optional[Mapping[str, Any]] = None,
    progress_cb: ProgressCb = None,
) -> Dict[str, Any]:
    """Generate the profile for the channel page at *source* and write it out."""

    def progress(frac: float, msg: str) -> None:
        if progress_cb is not None:
            progress_cb(frac, msg)

    ctx = _initialise_context(config, config_path, cli_overrides)
    logging.getLogger("streamdeck_emotes").setLevel(ctx.cfg["logging"]["level"])
    progress(0.05, f"generating {ctx.grid.tag} profile {ctx.name!r}")

    html = read_html(source, timeout=ctx.cfg["fetch"]["timeout_sec"])
    emotes = _ordered_emotes(html, ctx.cfg)
    progress(0.2, f"found {len(emotes)} emote(s)")

    images = fetch_images(
        emotes,
        max_workers=ctx.cfg["fetch"]["max_workers"],
        timeout=ctx.cfg["fetch"]["timeout_sec"],
    )
    progress(0.7, f"downloaded {len(images)} image(s)")

    profile = build_profile(ctx, images)
    if not profile.pages:
        LOG.warning("no emotes found; nothing to write")
        progress(1.0, "done")
        return {"pages": 0, "emotes": 0, "paths": [], "root_uuid": None}

    progress(0.8, f"writing {len(profile.pages)} page(s) to {ctx.output_dir}")
    paths = write_profile(profile, ctx.output_dir, merge_existing=ctx.merge_existing)
    progress(1.0, "done")

    return {
        "pages": len(profile.pages),
        "emotes": len(images),
        "paths": [str(path) for path in paths],
        "root_uuid": str(profile.root_uuid).upper(),
    }
