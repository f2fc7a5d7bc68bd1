"""Builders for the button variants placed on generated pages."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from .icons import render_nav_icon
from .models import STATE_IMAGE, BackButton, ContentButton, Emote, EmoteImage, ForwardButton, State


def pasted_text(label: str, prefix: str) -> str:
    """Return the ``:_{prefix}{Label}:`` shortcode typed by an emote button.

    With a non-empty prefix the first letter of the label is uppercased
    (ASCII only), matching how channel emote shortcodes are spelled.
    """

    name = label
    if prefix and name and name[0].isascii():
        name = name[0].upper() + name[1:]
    return f":_{prefix}{name}:"


def emote_button(
    emote: Emote,
    prefix: str,
    include_label: bool = True,
    image: Optional[bytes] = None,
) -> ContentButton:
    title = emote.name if include_label else ""
    return ContentButton(
        pasted_text=pasted_text(emote.name, prefix),
        state=State(image=STATE_IMAGE, title=title),
        image=image,
    )


def image_button(emote_image: EmoteImage, prefix: str, include_label: bool = True) -> ContentButton:
    return emote_button(emote_image.emote, prefix, include_label, emote_image.data)


def back_button() -> BackButton:
    return BackButton(image=render_nav_icon("back"))


def forward_button(target: UUID) -> ForwardButton:
    return ForwardButton(target=target, image=render_nav_icon("forward"))
