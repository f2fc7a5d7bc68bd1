"""Command line entry-point for Stream Deck emote profile generation."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .pipeline import run_pipeline

LOG = logging.getLogger("streamdeck_emotes.cli")


def _apply_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map CLI flags to config override keys."""
    overrides: Dict[str, Any] = {}
    if args.out:
        overrides["output.folder"] = str(Path(args.out))
    if args.name:
        overrides["profile.name"] = args.name
    if args.prefix is not None:
        overrides["profile.prefix"] = args.prefix
    if args.model:
        overrides["device.model"] = args.model
    if args.model_id:
        overrides["device.model_id"] = args.model_id
    if args.device_uuid is not None:
        overrides["device.uuid"] = args.device_uuid
    if args.root_uuid:
        overrides["profile.root_uuid"] = args.root_uuid
    if args.no_label:
        overrides["profile.include_label"] = False
    if args.no_merge:
        overrides["output.merge_existing"] = False
    if args.verbose:
        overrides["logging.level"] = "DEBUG"
    return overrides


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate Stream Deck profiles from YouTube membership emotes"
    )
    parser.add_argument("--in", dest="input", default="-", help="Channel page HTML: path, URL, or - for stdin")
    parser.add_argument("--out", dest="out", help="Output directory override")
    parser.add_argument("--config", dest="config", default="", help="Path to config.yaml")
    parser.add_argument("--name", dest="name", help="Profile name (also seeds page UUIDs)")
    parser.add_argument("--prefix", dest="prefix", help="Emote shortcode prefix, e.g. pomu")
    parser.add_argument("--model", dest="model", help="Device model: standard|xl|mini")
    parser.add_argument("--model-id", dest="model_id", help="Override the manifest DeviceModel string")
    parser.add_argument("--device-uuid", dest="device_uuid", help="Stream Deck device UUID")
    parser.add_argument("--root-uuid", dest="root_uuid", help="UUID of an existing root profile to regenerate")
    parser.add_argument("--no-label", dest="no_label", action="store_true", help="Hide emote names on buttons")
    parser.add_argument("--no-merge", dest="no_merge", action="store_true", help="Overwrite existing manifests")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        result = run_pipeline(
            args.input,
            config_path=Path(args.config) if args.config else None,
            cli_overrides=_apply_overrides(args),
            progress_cb=lambda frac, msg: LOG.info("%03d%% %s", int(frac * 100), msg),
        )
    except Exception as exc:  # pragma: no cover - CLI feedback
        LOG.exception("profile generation failed: %s", exc)
        return 1

    LOG.info("wrote %d page(s) for %d emote(s)", result["pages"], result["emotes"])
    if result["root_uuid"]:
        LOG.info("root profile: %s", result["root_uuid"])
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI behavior
    sys.exit(main())
