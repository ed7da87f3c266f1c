from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pbxproj import XcodeProject

from shareext.details.context import (
    BuildContext,
    ConfigurationMissing,
    HookInputs,
    find_xcode_project,
)
from shareext.details.extension_files import get_extension_files
from shareext.details.log import log, log_error
from shareext.details.preferences import (
    get_cordova_parameter,
    get_preferences,
    replace_preferences_in_file,
)
from shareext.xcode import patch_project
from shareext.xcode.build_settings import SigningIdentity


@dataclass
class HookResult:
    success: bool
    error: Optional[Exception] = None


def load_project(context: BuildContext, pbxproj_path: Path) -> Any:
    if context.project is not None:
        return context.project
    if not pbxproj_path.is_file():
        raise ConfigurationMissing(f"project file not found at {pbxproj_path}")
    log(f"Parsing existing project at location: {pbxproj_path}…")
    return XcodeProject.load(str(pbxproj_path))


def signing_identity(inputs: HookInputs, plugin_id: str) -> SigningIdentity:
    def parameter(name: str) -> Optional[str]:
        return get_cordova_parameter(
            inputs.package_json, inputs.config_xml, name, plugin_id
        )

    return SigningIdentity(
        development_team=parameter("DEVELOPMENT_TEAM"),
        bundle_identifier=parameter("SHARE_BUNDLE_IDENTIFIER"),
        provisioning_profile=parameter("PROVISIONING_PROFILE"),
    )


def add_share_extension_target(context: BuildContext) -> None:
    """
    Add the share extension target to the Cordova generated Xcode project.

    Every failure propagates. The project file is written once, after all
    changes have been applied in memory, so an aborted run leaves it as it was.
    Files in the extension folder are rewritten before that point.
    """
    config = context.config
    log(f"Adding {config.target_name} target to XCode project")

    inputs = HookInputs.load(context.project_root)
    project_folder, project_name = find_xcode_project(context.ios_folder)
    preferences = get_preferences(inputs, project_name, config.plugin_id)

    pbxproj_path = project_folder / "project.pbxproj"
    project = load_project(context, pbxproj_path)

    files = get_extension_files(context.extension_folder)
    for file in files.substitutable:
        replace_preferences_in_file(file.path, preferences)

    patch_project(
        project,
        files,
        config,
        signing_identity(inputs, config.plugin_id),
        context.debug,
    )

    project.save(str(pbxproj_path))
    log(
        f"Successfully added {config.target_name} target to XCode project: "
        f"{context.debug}"
    )


def run_hook(context: BuildContext) -> HookResult:
    try:
        add_share_extension_target(context)
    except Exception as e:
        log_error(f"unable to add {context.config.target_name} target: {e}")
        return HookResult(success=False, error=e)
    return HookResult(success=True)
