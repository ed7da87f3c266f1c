# Xcode project vocabulary.
#
# The project graph itself belongs to pbxproj; this module only holds the
# values written into it and a typed view over build settings.

from enum import Enum
from typing import Any, Dict, Optional

import uuid


def generate_id() -> str:
    return uuid.uuid4().hex.upper()[:24]


# Source Tree values used in PBXFileReference and PBXGroup
class SourceTree(Enum):
    GROUP = "<group>"
    SOURCE_ROOT = "SOURCE_ROOT"
    BUILT_PRODUCTS_DIR = "BUILT_PRODUCTS_DIR"


# Destination subfolder specifications used in PBXCopyFilesBuildPhase
class DstSubfolderSpec(Enum):
    ABSOLUTE_PATH = 0
    WRAPPER = 1
    EXECUTABLES = 6
    RESOURCES = 7
    FRAMEWORKS = 10
    SHARED_FRAMEWORKS = 11
    SHARED_SUPPORT = 12
    PLUGINS = 13  # App extensions are embedded here
    JAVA_RESOURCES = 15
    PRODUCTS_DIRECTORY = 16


# File types used in PBXFileReference
class FileType(Enum):
    C_HEADER = "sourcecode.c.h"
    OBJC = "sourcecode.c.objc"
    SWIFT = "sourcecode.swift"
    XIB = "file.xib"
    STORYBOARD = "file.storyboard"
    PLIST = "text.plist.xml"
    ENTITLEMENTS = "text.plist.entitlements"
    STRINGS = "text.plist.strings"
    ASSET_CATALOG = "folder.assetcatalog"
    PNG = "image.png"
    JPEG = "image.jpeg"
    APP_EXTENSION = "wrapper.app-extension"
    TEXT = "text"

    @staticmethod
    def from_extension(ext: str) -> "FileType":
        if ext.startswith("."):
            ext = ext[1:]

        ext_to_type = {
            "h": FileType.C_HEADER,
            "m": FileType.OBJC,
            "swift": FileType.SWIFT,
            "xib": FileType.XIB,
            "storyboard": FileType.STORYBOARD,
            "plist": FileType.PLIST,
            "entitlements": FileType.ENTITLEMENTS,
            "strings": FileType.STRINGS,
            "xcassets": FileType.ASSET_CATALOG,
            "png": FileType.PNG,
            "jpg": FileType.JPEG,
            "jpeg": FileType.JPEG,
            "appex": FileType.APP_EXTENSION,
        }

        return ext_to_type.get(ext.lower(), FileType.TEXT)


# Product types used in PBXNativeTarget
class ProductType(Enum):
    APPLICATION = "com.apple.product-type.application"
    APP_EXTENSION = "com.apple.product-type.app-extension"


class ProxyType(Enum):
    TARGET_DEPENDENCY = 1


# Build settings this tool reads or writes
class BuildSettingKey(Enum):
    PRODUCT_NAME = "PRODUCT_NAME"
    INFOPLIST_FILE = "INFOPLIST_FILE"
    SKIP_INSTALL = "SKIP_INSTALL"
    LD_RUNPATH_SEARCH_PATHS = "LD_RUNPATH_SEARCH_PATHS"
    GCC_PREPROCESSOR_DEFINITIONS = "GCC_PREPROCESSOR_DEFINITIONS"
    CODE_SIGN_ENTITLEMENTS = "CODE_SIGN_ENTITLEMENTS"
    CODE_SIGN_IDENTITY = "CODE_SIGN_IDENTITY"
    CODE_SIGN_STYLE = "CODE_SIGN_STYLE"
    DEVELOPMENT_TEAM = "DEVELOPMENT_TEAM"
    PRODUCT_BUNDLE_IDENTIFIER = "PRODUCT_BUNDLE_IDENTIFIER"
    PROVISIONING_PROFILE = "PROVISIONING_PROFILE"


class BuildSettings:
    """
    Typed view over the ``buildSettings`` of a pbxproj XCBuildConfiguration.

    Only the keys of BuildSettingKey are accessed; every other setting stays
    on the underlying object as it was parsed.
    """

    def __init__(self, raw: Any):
        self.raw = raw

    def get(self, key: BuildSettingKey) -> Optional[Any]:
        return getattr(self.raw, key.value, None)

    def set(self, key: BuildSettingKey, value: Any) -> None:
        self.raw[key.value] = value

    def __contains__(self, key: BuildSettingKey) -> bool:
        return self.get(key) is not None

    def as_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in vars(self.raw).items() if not k.startswith("_")}
