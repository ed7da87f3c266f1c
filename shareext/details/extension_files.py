import os

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List

from shareext.details.context import ConfigurationMissing

SOURCE = "source"
CONFIG = "config"
RESOURCE = "resource"

# Anything not listed here is bundled as a resource
FILE_TYPES: Dict[str, str] = {
    ".h": SOURCE,
    ".m": SOURCE,
    ".plist": CONFIG,
    ".entitlements": CONFIG,
}


@dataclass(frozen=True)
class ExtensionFile:
    name: str
    path: Path
    extension: str


@dataclass
class ExtensionFiles:
    source: List[ExtensionFile] = field(default_factory=list)
    config: List[ExtensionFile] = field(default_factory=list)
    resource: List[ExtensionFile] = field(default_factory=list)

    def add(self, file: ExtensionFile) -> None:
        getattr(self, classify(file.extension)).append(file)

    @property
    def substitutable(self) -> List[ExtensionFile]:
        return self.config + self.source

    def __len__(self) -> int:
        return len(self.source) + len(self.config) + len(self.resource)


def classify(extension: str) -> str:
    return FILE_TYPES.get(extension, RESOURCE)


def iter_extension_files(folder: Path) -> Iterator[ExtensionFile]:
    if not folder.is_dir():
        raise ConfigurationMissing(f"extension folder not found at {folder}")
    for name in os.listdir(folder):
        # skip junk such as .DS_Store
        if name.startswith("."):
            continue
        yield ExtensionFile(
            name=name,
            path=folder.joinpath(name),
            extension=os.path.splitext(name)[1],
        )


def get_extension_files(folder: Path) -> ExtensionFiles:
    files = ExtensionFiles()
    for file in iter_extension_files(folder):
        files.add(file)
    return files
