from pathlib import Path

import pytest

from shareext.details.context import ConfigurationMissing
from shareext.details.extension_files import (
    CONFIG,
    RESOURCE,
    SOURCE,
    classify,
    get_extension_files,
)


@pytest.mark.parametrize(
    "extension,category",
    [
        (".h", SOURCE),
        (".m", SOURCE),
        (".plist", CONFIG),
        (".entitlements", CONFIG),
        (".png", RESOURCE),
        (".storyboard", RESOURCE),
        (".swift", RESOURCE),
        ("", RESOURCE),
    ],
)
def test_classify(extension, category):
    assert classify(extension) == category


def test_get_extension_files_buckets_by_extension(extension_folder: Path):
    files = get_extension_files(extension_folder)

    assert [f.name for f in files.source] == ["ShareViewController.h"]
    assert [f.name for f in files.config] == ["ShareExtension-Info.plist"]
    assert [f.name for f in files.resource] == ["icon.png"]
    assert len(files) == 3

    header = files.source[0]
    assert header.path == extension_folder / "ShareViewController.h"
    assert header.extension == ".h"


def test_hidden_entries_are_skipped(extension_folder: Path):
    (extension_folder / ".gitkeep").write_text("")
    (extension_folder / ".hidden.m").write_text("")

    files = get_extension_files(extension_folder)

    names = [f.name for f in files.source + files.config + files.resource]
    assert not [name for name in names if name.startswith(".")]


def test_substitutable_files_exclude_resources(extension_folder: Path):
    (extension_folder / "ShareExtension.entitlements").write_text("<plist/>")
    (extension_folder / "ShareViewController.m").write_text("")

    files = get_extension_files(extension_folder)

    assert sorted(f.name for f in files.substitutable) == [
        "ShareExtension-Info.plist",
        "ShareExtension.entitlements",
        "ShareViewController.h",
        "ShareViewController.m",
    ]


def test_missing_folder_is_fatal(tmp_path: Path):
    with pytest.raises(ConfigurationMissing):
        get_extension_files(tmp_path / "ShareExtension")
