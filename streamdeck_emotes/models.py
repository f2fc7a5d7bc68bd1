"""Domain models for Stream Deck emote profile generation."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from uuid import UUID

from .errors import UnknownModelError

# ---------------------------------------------------------------------------
# Grid model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridModel:
    """Addressable button grid of one Stream Deck panel."""

    tag: str
    width: int
    height: int
    model_id: str

    @property
    def capacity(self) -> int:
        return self.width * self.height

    def contains(self, position: "Position") -> bool:
        return 0 <= position.col < self.width and 0 <= position.row < self.height


DEVICE_MODELS: Dict[str, GridModel] = {
    "standard": GridModel("standard", 5, 3, "20GBA9901"),
    "xl": GridModel("xl", 8, 4, "20GAT9901"),
    "mini": GridModel("mini", 3, 2, "unknown"),
}


def grid_for_model(tag: str, model_id: Optional[str] = None) -> GridModel:
    """Resolve a device model tag (case-insensitive) into its grid."""

    key = str(tag).strip().lower()
    if key not in DEVICE_MODELS:
        known = ", ".join(sorted(DEVICE_MODELS))
        raise UnknownModelError(f"unknown device model {tag!r} (expected one of: {known})")

    grid = DEVICE_MODELS[key]
    if model_id:
        grid = GridModel(grid.tag, grid.width, grid.height, str(model_id))
    return grid


# ---------------------------------------------------------------------------
# Positions and buttons
# ---------------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Position:
    """A (column, row) coordinate; serialised as ``"col,row"``."""

    col: int
    row: int

    @property
    def key(self) -> str:
        return f"{self.col},{self.row}"

    @classmethod
    def parse(cls, key: str) -> "Position":
        col, sep, row = str(key).partition(",")
        if not sep:
            raise ValueError(f"position key {key!r} is not of the form 'col,row'")
        return cls(int(col.strip()), int(row.strip()))

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class State:
    """Caption and style metadata of a button's single state."""

    image: str = ""
    title: str = ""
    f_family: str = ""
    f_size: str = "12"
    f_style: str = ""
    f_underline: str = "off"
    title_alignment: str = "bottom"
    title_color: str = "#fbfcff"
    title_show: str = ""


STATE_IMAGE = "state0.png"


@dataclass(frozen=True)
class ContentButton:
    """Types a ``:_emote:`` shortcode when pressed."""

    pasted_text: str
    state: State = State(image=STATE_IMAGE)
    image: Optional[bytes] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class BackButton:
    """Returns to the parent page."""

    state: State = State(image=STATE_IMAGE, title="Back")
    image: Optional[bytes] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class ForwardButton:
    """Opens the child page identified by ``target``."""

    target: UUID
    state: State = State(image=STATE_IMAGE, title="Next")
    image: Optional[bytes] = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class PersistedButton:
    """An action record read back from an existing manifest, kept verbatim."""

    payload: Mapping[str, Any]


Button = Union[ContentButton, BackButton, ForwardButton, PersistedButton]


# ---------------------------------------------------------------------------
# Pages and profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Page:
    """One grid's worth of buttons (a Stream Deck folder profile).

    ``buttons`` is stored as a read-only view, so a page is immutable but not
    hashable.
    """

    uuid: UUID
    index: int
    grid: GridModel
    buttons: Mapping[Position, Button]

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "buttons", MappingProxyType(dict(self.buttons)))


@dataclass(frozen=True)
class Profile:
    """Holds the generated page chain and its manifest metadata."""

    name: str
    device_uuid: str
    grid: GridModel
    pages: Tuple[Page, ...]

    @property
    def root_uuid(self) -> Optional[UUID]:
        return self.pages[0].uuid if self.pages else None


# ---------------------------------------------------------------------------
# Emotes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Emote:
    """A named emote and the URL of its image."""

    name: str
    url: str


@dataclass(frozen=True)
class EmoteImage:
    """An emote together with its downloaded image bytes."""

    emote: Emote
    data: bytes = field(repr=False)
