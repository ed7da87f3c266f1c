import json
import os

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from shareext.config import Config


class ConfigurationMissing(RuntimeError):
    pass


class BuildContext:
    def __init__(
        self,
        project_root: Path,
        debug: bool = False,
        project: Optional[Any] = None,
        config: Optional[Config] = None,
    ):
        self.project_root = Path(project_root).resolve()
        self.debug = debug
        # pre-parsed pbxproj.XcodeProject handed over by the caller, if any
        self.project = project
        self.config = config if config is not None else Config()

    @staticmethod
    def from_environment(
        project_root: Path,
        environ: Mapping[str, str] = os.environ,
        **kwargs,
    ) -> "BuildContext":
        # any non-empty IS_DEBUG counts as a debug build
        return BuildContext(
            project_root=project_root, debug=bool(environ.get("IS_DEBUG")), **kwargs
        )

    @property
    def ios_folder(self) -> Path:
        return self.project_root.joinpath(self.config.platform_folder)

    @property
    def extension_folder(self) -> Path:
        return self.ios_folder.joinpath(self.config.product_folder)


@dataclass
class HookInputs:
    package_json: Dict[str, Any] = field(default_factory=dict)
    config_xml: str = ""

    @staticmethod
    def load(project_root: Path) -> "HookInputs":
        return HookInputs(
            package_json=read_package_json(project_root / "package.json"),
            config_xml=read_config_xml(project_root / "config.xml"),
        )


def read_package_json(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigurationMissing(f"package metadata not found at {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationMissing(f"unable to parse {path}: {e}") from e


def read_config_xml(path: Path) -> str:
    if not path.is_file():
        raise ConfigurationMissing(f"manifest not found at {path}")
    text = path.read_text(encoding="utf-8")
    # drop BOMs and other junk in front of the xml prolog
    start = text.find("<")
    if start > 0:
        text = text[start:]
    return text


def find_xcode_project(ios_folder: Path) -> Tuple[Path, str]:
    """
    Locate the generated Xcode project inside the iOS platform folder.

    Returns:
        The ``.xcodeproj`` folder and the project name (folder name without suffix).

    Raises:
        ConfigurationMissing: If the folder holds no ``.xcodeproj``.
    """
    if not ios_folder.is_dir():
        raise ConfigurationMissing(f"iOS platform folder not found at {ios_folder}")
    for entry in sorted(ios_folder.iterdir()):
        if entry.suffix == ".xcodeproj" and entry.is_dir():
            return entry, entry.stem
    raise ConfigurationMissing(f"no .xcodeproj found in {ios_folder}")
