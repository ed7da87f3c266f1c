from pbxproj import XcodeProject

from shareext.config import Config
from shareext.details.extension_files import ExtensionFiles
from shareext.details.log import log
from shareext.xcode.build_settings import (
    SigningIdentity,
    SigningPolicy,
    apply_signing,
    set_entitlements,
)
from shareext.xcode.target import ExtensionTarget, upsert_extension_target


def patch_project(
    project: XcodeProject,
    files: ExtensionFiles,
    config: Config,
    identity: SigningIdentity,
    debug: bool,
) -> ExtensionTarget:
    """Apply the extension target and its signing settings to a loaded project."""
    extension = upsert_extension_target(project, files, config)
    set_entitlements(project, config)

    log(
        f"Adding team {identity.development_team} "
        f"and provisioning profile {identity.provisioning_profile}"
    )
    # without a team there is nothing to sign with, leave signing to Xcode
    if identity.development_team:
        policy = SigningPolicy.for_build(debug, config.distribution_identity)
        apply_signing(project, config, identity, policy)
    return extension
