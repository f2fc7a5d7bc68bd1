"""Test writing profiles to disk"""
import json
import logging
import uuid

import pytest

from streamdeck_emotes.errors import ManifestWriteError
from streamdeck_emotes.layout import layout_pages
from streamdeck_emotes.models import Profile
from streamdeck_emotes.packaging import page_directories, profile_dir_name, write_profile

ROOT = uuid.UUID("ac20bcf3-0a7c-4243-bb74-5c0dc5681ba5")


@pytest.fixture
def profile(make_buttons, standard_grid):
    pages = layout_pages(make_buttons(20), standard_grid, ROOT, "Pomu")
    return Profile(name="Pomu", device_uuid="@(1)[4057/128/DL16K1A71331]", grid=standard_grid, pages=tuple(pages))


def read_manifest(page_dir):
    return json.loads((page_dir / "manifest.json").read_text(encoding="utf-8"))


def test_profile_dir_name_is_uppercase():
    assert profile_dir_name(ROOT) == "AC20BCF3-0A7C-4243-BB74-5C0DC5681BA5.sdProfile"


def test_child_pages_nest_under_profiles(profile, tmp_path):
    root_dir, child_dir = page_directories(profile, tmp_path)
    assert root_dir == tmp_path / profile_dir_name(ROOT)
    assert child_dir == root_dir / "Profiles" / profile_dir_name(profile.pages[1].uuid)


def test_write_profile_layout(profile, tmp_path):
    paths = write_profile(profile, tmp_path)
    assert len(paths) == 2

    root_manifest = read_manifest(paths[0])
    assert root_manifest["DeviceModel"] == "20GBA9901"
    assert root_manifest["DeviceUUID"] == "@(1)[4057/128/DL16K1A71331]"
    assert root_manifest["Name"] == "Pomu"
    assert root_manifest["Version"] == "1.0"
    assert len(root_manifest["Actions"]) == 13
    forward = root_manifest["Actions"]["0,2"]
    assert forward["Settings"]["ProfileUUID"] == str(profile.pages[1].uuid).upper()
    assert root_manifest["Actions"]["1,0"]["Settings"]["pastedText"] == ":_pomuEmote0:"

    child_manifest = read_manifest(paths[1])
    assert child_manifest["Actions"]["0,0"]["UUID"] == "com.elgato.streamdeck.profile.backtoparent"
    assert len(child_manifest["Actions"]) == 9


def test_write_profile_images(profile, tmp_path):
    root_dir, child_dir = write_profile(profile, tmp_path)
    assert (root_dir / "1,0" / "CustomImages" / "state0.png").read_bytes() == b"png-emote0"
    assert (child_dir / "1,0" / "CustomImages" / "state0.png").read_bytes() == b"png-emote12"
    assert (root_dir / "0,2" / "CustomImages" / "state0.png").read_bytes().startswith(b"\x89PNG")
    assert (child_dir / "0,0" / "CustomImages" / "state0.png").read_bytes().startswith(b"\x89PNG")
    assert not (root_dir / "0,0").exists()


def test_rewrite_preserves_custom_buttons(profile, tmp_path):
    root_dir, _ = write_profile(profile, tmp_path)
    manifest = read_manifest(root_dir)
    custom = {"State": 0, "States": [{"Title": "Mute"}], "Name": "Mute", "UUID": "x.mute", "Settings": {}}
    manifest["Actions"]["0,1"] = custom
    manifest["Actions"]["1,0"]["Settings"]["pastedText"] = ":_edited:"
    (root_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")

    write_profile(profile, tmp_path)

    rewritten = read_manifest(root_dir)
    assert rewritten["Actions"]["0,1"] == custom
    assert rewritten["Actions"]["1,0"]["Settings"]["pastedText"] == ":_pomuEmote0:"


def test_rewrite_skips_corrupt_action_and_keeps_custom(make_buttons, standard_grid, tmp_path, caplog):
    """Test a corrupt action does not cost the user their other buttons"""
    pages = layout_pages(make_buttons(5), standard_grid, ROOT, "Pomu")
    small = Profile(name="Pomu", device_uuid="", grid=standard_grid, pages=tuple(pages))
    (root_dir,) = write_profile(small, tmp_path)

    manifest = read_manifest(root_dir)
    custom = {"State": 0, "States": [{"Title": "Mute"}], "Name": "Mute", "UUID": "x.mute", "Settings": {}}
    manifest["Actions"]["0,1"] = custom
    manifest["Actions"]["4,2"] = None
    (root_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        write_profile(small, tmp_path)

    rewritten = read_manifest(root_dir)["Actions"]
    assert rewritten["0,1"] == custom
    assert "4,2" not in rewritten
    assert len(rewritten) == 6
    assert "skipping persisted action at 4,2" in caplog.text
    assert "ignoring existing manifest" not in caplog.text


def test_rewrite_without_merge_drops_custom_buttons(profile, tmp_path):
    root_dir, _ = write_profile(profile, tmp_path)
    manifest = read_manifest(root_dir)
    manifest["Actions"]["0,1"] = {"Name": "Mute"}
    (root_dir / "manifest.json").write_text(json.dumps(manifest), encoding="utf-8")

    write_profile(profile, tmp_path, merge_existing=False)
    assert "0,1" not in read_manifest(root_dir)["Actions"]


@pytest.mark.parametrize("content", ["not json", "null", '{"Actions": []}'])
def test_malformed_existing_manifest_falls_back(profile, tmp_path, caplog, content):
    root_dir = tmp_path / profile_dir_name(ROOT)
    root_dir.mkdir()
    (root_dir / "manifest.json").write_text(content, encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        write_profile(profile, tmp_path)

    assert "ignoring existing manifest" in caplog.text
    assert len(read_manifest(root_dir)["Actions"]) == 13


def test_write_failure_raises_manifest_write_error(profile, tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("a file where a directory should be", encoding="utf-8")
    with pytest.raises(ManifestWriteError):
        write_profile(profile, blocker)
