"""Pytest configuration and shared fixtures"""
import json
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from streamdeck_emotes.actions import emote_button  # noqa: E402
from streamdeck_emotes.models import Emote, grid_for_model  # noqa: E402


@pytest.fixture(scope="session")
def project_root_path():
    """Get the project root path"""
    return Path(__file__).parent.parent


@pytest.fixture
def standard_grid():
    return grid_for_model("standard")


@pytest.fixture
def make_emotes():
    """Factory for ``n`` distinct emotes"""
    def _make(n):
        return [Emote(name=f"emote{i}", url=f"https://img.example/emote{i}") for i in range(n)]
    return _make


@pytest.fixture
def make_buttons(make_emotes):
    """Factory for ``n`` content buttons carrying fake image bytes"""
    def _make(n, prefix="pomu"):
        return [
            emote_button(emote, prefix, True, f"png-{emote.name}".encode())
            for emote in make_emotes(n)
        ]
    return _make


def channel_html(images, tab_title="Membership"):
    """Build a channel page embedding ``ytInitialData`` with the given perk images"""
    data = {
        "contents": {
            "twoColumnBrowseResultsRenderer": {
                "tabs": [
                    {"tabRenderer": {"title": "Home", "content": {}}},
                    {
                        "tabRenderer": {
                            "title": tab_title,
                            "content": {
                                "sectionListRenderer": {
                                    "contents": [
                                        {
                                            "sponsorshipsManagementRenderer": {
                                                "content": [
                                                    {"somethingElse": {}},
                                                    {
                                                        "sponsorshipsExpandableMessageRenderer": {
                                                            "expandableItems": [
                                                                {
                                                                    "sponsorshipsPerksRenderer": {
                                                                        "perks": [
                                                                            {
                                                                                "sponsorshipsPerkRenderer": {
                                                                                    "images": images
                                                                                }
                                                                            }
                                                                        ]
                                                                    }
                                                                }
                                                            ]
                                                        }
                                                    },
                                                ]
                                            }
                                        }
                                    ]
                                }
                            },
                        }
                    },
                ]
            }
        }
    }
    return (
        "<html><head><script>var ytInitialData = "
        + json.dumps(data)
        + ";</script><script>var other = {};</script></head></html>"
    )


def perk_image(label, url):
    return {
        "accessibility": {"accessibilityData": {"label": label}},
        "thumbnails": [{"url": url, "width": 48}],
    }


@pytest.fixture
def make_channel_html():
    def _make(names):
        images = [perk_image(name, f"https://yt3.example/{name}=w48-h48-c-k-nd") for name in names]
        return channel_html(images)
    return _make
