"""Serialisation of pages into Stream Deck ``manifest.json`` payloads."""

from __future__ import annotations

from typing import Any, Dict

from .models import BackButton, Button, ContentButton, ForwardButton, Page, PersistedButton, State

MANIFEST_VERSION = "1.0"

BACK_TO_PARENT = "com.elgato.streamdeck.profile.backtoparent"
OPEN_CHILD = "com.elgato.streamdeck.profile.openchild"
SYSTEM_TEXT = "com.elgato.streamdeck.system.text"


def serialise_state(state: State) -> Dict[str, str]:
    return {
        "FFamily": state.f_family,
        "FSize": state.f_size,
        "FStyle": state.f_style,
        "FUnderline": state.f_underline,
        "Image": state.image,
        "Title": state.title,
        "TitleAlignment": state.title_alignment,
        "TitleColor": state.title_color,
        "TitleShow": state.title_show,
    }


def serialise_button(button: Button) -> Dict[str, Any]:
    """Convert a button into its manifest action record."""

    if isinstance(button, PersistedButton):
        return dict(button.payload)

    if isinstance(button, ContentButton):
        name, uuid = "Text", SYSTEM_TEXT
        settings: Dict[str, Any] = {"isSendingEnter": False, "pastedText": button.pasted_text}
    elif isinstance(button, BackButton):
        name, uuid = "Open Folder", BACK_TO_PARENT
        settings = {}
    elif isinstance(button, ForwardButton):
        name, uuid = "Create Folder", OPEN_CHILD
        settings = {"ProfileUUID": str(button.target).upper()}
    else:
        raise TypeError(f"cannot serialise button of type {type(button).__name__}")

    return {
        "State": 0,
        "States": [serialise_state(button.state)],
        "Name": name,
        "UUID": uuid,
        "Settings": settings,
    }


def build_manifest(page: Page, name: str, device_uuid: str) -> Dict[str, Any]:
    """Create the manifest payload of one page."""

    actions = {
        position.key: serialise_button(button)
        for position, button in sorted(page.buttons.items(), key=lambda item: item[0])
    }
    return {
        "Actions": actions,
        "DeviceModel": page.grid.model_id,
        "DeviceUUID": device_uuid,
        "Name": name,
        "Version": MANIFEST_VERSION,
    }
