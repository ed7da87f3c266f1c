import json
import shutil
from pathlib import Path
from typing import Any, Dict, List

import pytest
from pbxproj import XcodeProject

FIXTURES = Path(__file__).resolve().parent / "fixtures"

PLUGIN_ID = "cordova-plugin-share-extension"

CONFIG_XML = """<?xml version='1.0' encoding='utf-8'?>
<widget id="io.cordova.hellocordova" version="1.2.3" ios-CFBundleVersion="42" xmlns="http://www.w3.org/ns/widgets">
    <name>HelloCordova</name>
    <preference name="DEVELOPMENT_TEAM" value="TEAM1" />
    <preference name="PROVISIONING_PROFILE" value="profile-uuid" />
</widget>
"""

PACKAGE_JSON: Dict[str, Any] = {
    "name": "io.cordova.hellocordova",
    "cordova": {
        "plugins": {
            PLUGIN_ID: {"SHARE_BUNDLE_IDENTIFIER": "io.cordova.hellocordova.share"}
        }
    },
}

HEADER = "// __DISPLAY_NAME__ shares into __GROUP_IDENTIFIER__\n"
INFO_PLIST = """<plist version="1.0"><dict>
<key>CFBundleIdentifier</key><string>__BUNDLE_IDENTIFIER__</string>
<key>CFBundleShortVersionString</key><string>__BUNDLE_SHORT_VERSION_STRING__</string>
<key>CFBundleVersion</key><string>__BUNDLE_VERSION__</string>
</dict></plist>
"""
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture
def cordova_project(tmp_path: Path) -> Path:
    """A Cordova project root with an iOS platform and a ShareExtension folder."""
    root = tmp_path / "app"
    ios = root / "platforms" / "ios"
    xcodeproj = ios / "HelloCordova.xcodeproj"
    xcodeproj.mkdir(parents=True)
    shutil.copy(FIXTURES / "project.pbxproj", xcodeproj / "project.pbxproj")

    extension = ios / "ShareExtension"
    extension.mkdir()
    (extension / "ShareViewController.h").write_text(HEADER, encoding="utf-8")
    (extension / "ShareExtension-Info.plist").write_text(INFO_PLIST, encoding="utf-8")
    (extension / "icon.png").write_bytes(PNG_BYTES)
    (extension / ".DS_Store").write_bytes(b"\x00\x00")

    (root / "config.xml").write_text(CONFIG_XML, encoding="utf-8")
    (root / "package.json").write_text(json.dumps(PACKAGE_JSON), encoding="utf-8")
    return root


@pytest.fixture
def pbxproj_path(cordova_project: Path) -> Path:
    return (
        cordova_project
        / "platforms"
        / "ios"
        / "HelloCordova.xcodeproj"
        / "project.pbxproj"
    )


@pytest.fixture
def project(pbxproj_path: Path) -> XcodeProject:
    return XcodeProject.load(str(pbxproj_path))


@pytest.fixture
def extension_folder(cordova_project: Path) -> Path:
    return cordova_project / "platforms" / "ios" / "ShareExtension"


def targets_named(project: XcodeProject, name: str) -> List[Any]:
    return [t for t in project.objects.get_targets() if t.name == name]


def groups_named(project: XcodeProject, name: str) -> List[Any]:
    return [
        g
        for g in project.objects.get_objects_in_section("PBXGroup")
        if getattr(g, "name", None) == name
    ]


def child_names(project: XcodeProject, group: Any) -> List[str]:
    names = []
    for child_id in group.children:
        child = project.objects[child_id]
        names.append(getattr(child, "name", None) or child.path)
    return names


def phase_file_names(project: XcodeProject, phase: Any) -> List[str]:
    names = []
    for build_file_id in phase.files:
        file_ref = project.objects[project.objects[build_file_id].fileRef]
        names.append(getattr(file_ref, "name", None) or file_ref.path)
    return names


def target_phases(project: XcodeProject, target: Any, isa: str) -> List[Any]:
    phases = [project.objects[phase_id] for phase_id in target.buildPhases]
    return [phase for phase in phases if phase.isa == isa]


def target_configurations(project: XcodeProject, target: Any) -> List[Any]:
    configuration_list = project.objects[target.buildConfigurationList]
    return [project.objects[c] for c in configuration_list.buildConfigurations]
