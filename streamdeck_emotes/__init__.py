"""Stream Deck profile generator for YouTube membership emotes."""

from .errors import (
    EmoteParseError,
    FetchError,
    MalformedManifestError,
    ManifestWriteError,
    ProfileGenerationError,
    UnknownModelError,
)
from .identifiers import derive_page_uuid
from .layout import layout_pages
from .merge import merge_page
from .models import Emote, GridModel, Page, Position, Profile, grid_for_model

__all__ = [
    "Emote",
    "GridModel",
    "Page",
    "Position",
    "Profile",
    "grid_for_model",
    "derive_page_uuid",
    "layout_pages",
    "merge_page",
    "ProfileGenerationError",
    "UnknownModelError",
    "EmoteParseError",
    "FetchError",
    "MalformedManifestError",
    "ManifestWriteError",
]
