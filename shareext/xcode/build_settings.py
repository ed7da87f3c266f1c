from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from pbxproj import XcodeProject

from shareext.config import Config
from shareext.details.log import log
from shareext.xcode.model import BuildSettingKey, BuildSettings

AUTOMATIC = "Automatic"
MANUAL = "Manual"

UPDATE_LOG_KEYS = (
    BuildSettingKey.CODE_SIGN_IDENTITY,
    BuildSettingKey.CODE_SIGN_STYLE,
    BuildSettingKey.PRODUCT_BUNDLE_IDENTIFIER,
)


def is_extension_configuration(product_name: Any, target_name: str) -> bool:
    return isinstance(product_name, str) and target_name in product_name


def extension_configurations(
    project: XcodeProject, target_name: str
) -> Iterator[Tuple[str, BuildSettings]]:
    configurations = project.objects.get_objects_in_section("XCBuildConfiguration")
    for configuration in configurations:
        raw = getattr(configuration, "buildSettings", None)
        if raw is None:
            continue
        settings = BuildSettings(raw)
        product_name = settings.get(BuildSettingKey.PRODUCT_NAME)
        if is_extension_configuration(product_name, target_name):
            yield product_name, settings


def set_entitlements(project: XcodeProject, config: Config) -> int:
    count = 0
    for _, settings in extension_configurations(project, config.target_name):
        settings.set(BuildSettingKey.CODE_SIGN_ENTITLEMENTS, config.entitlements_path)
        count += 1
    return count


@dataclass(frozen=True)
class SigningIdentity:
    development_team: Optional[str]
    bundle_identifier: Optional[str] = None
    provisioning_profile: Optional[str] = None


@dataclass(frozen=True)
class SigningPolicy:
    """
    How the extension is signed for one kind of build.

    Debug builds let Xcode pick the identity and profile; release builds are
    pinned to the distribution identity and the configured profile.
    """

    code_sign_style: str
    code_sign_identity: Optional[str]
    uses_provisioning_profile: bool

    @staticmethod
    def for_build(debug: bool, distribution_identity: str) -> "SigningPolicy":
        if debug:
            return SigningPolicy(
                code_sign_style=AUTOMATIC,
                code_sign_identity=None,
                uses_provisioning_profile=False,
            )
        return SigningPolicy(
            code_sign_style=MANUAL,
            code_sign_identity=distribution_identity,
            uses_provisioning_profile=True,
        )


def apply_signing(
    project: XcodeProject,
    config: Config,
    identity: SigningIdentity,
    policy: SigningPolicy,
) -> int:
    count = 0
    matches = extension_configurations(project, config.target_name)
    for product_name, settings in matches:
        if policy.uses_provisioning_profile and identity.provisioning_profile:
            settings.set(
                BuildSettingKey.PROVISIONING_PROFILE, identity.provisioning_profile
            )
        settings.set(BuildSettingKey.DEVELOPMENT_TEAM, identity.development_team)
        log(f"Update DEVELOPMENT_TEAM= {identity.development_team}")
        if identity.bundle_identifier:
            settings.set(
                BuildSettingKey.PRODUCT_BUNDLE_IDENTIFIER, identity.bundle_identifier
            )
        log(f"Added signing identities for extension to {product_name}!")
        identity_before = settings.get(BuildSettingKey.CODE_SIGN_IDENTITY)
        log(f"Current CODE_SIGN_IDENTITY= {identity_before}")
        if policy.code_sign_identity is not None:
            settings.set(BuildSettingKey.CODE_SIGN_IDENTITY, policy.code_sign_identity)
        settings.set(BuildSettingKey.CODE_SIGN_STYLE, policy.code_sign_style)
        for key in UPDATE_LOG_KEYS:
            log(f"Update {key.value}= {settings.get(key)}")
        log(f"buildSettings is {settings.as_dict()}")
        count += 1
    return count
