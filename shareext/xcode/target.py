# Extension target upsert.
#
# Locates or creates the extension's PBXNativeTarget, its sources and resources
# build phases and its PBXGroup inside a pbxproj.XcodeProject, then registers
# the extension's files. Nothing is ever removed from the project.

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pbxproj import XcodeProject
from pbxproj.PBXKey import PBXKey
from pbxproj.pbxsections import (
    PBXBuildFile,
    PBXContainerItemProxy,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXGroup,
    PBXNativeTarget,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    PBXTargetDependency,
    XCBuildConfiguration,
    XCConfigurationList,
)

from shareext.config import Config
from shareext.details.extension_files import ExtensionFile, ExtensionFiles
from shareext.details.log import log
from shareext.xcode.model import (
    BuildSettingKey,
    DstSubfolderSpec,
    FileType,
    ProductType,
    ProxyType,
    SourceTree,
    generate_id,
)

BUILD_ACTION_MASK = 2147483647
RUNPATH_SEARCH_PATHS = (
    "$(inherited) @executable_path/Frameworks @executable_path/../../Frameworks"
)


@dataclass
class ExtensionTarget:
    target: Any
    group: Any
    sources: Optional[Any] = None
    resources: Optional[Any] = None
    created: bool = False


def add_object(project: XcodeProject, isa_type: Type, **fields: Any) -> Any:
    object_id = generate_id()
    obj = isa_type(project.objects).parse({"isa": isa_type.__name__, **fields})
    # the id has to be in place before insertion, objects are kept sorted by id
    obj._id = PBXKey(object_id, project.objects)
    project.objects[object_id] = obj
    return obj


def reference(project: XcodeProject, obj: Any) -> PBXKey:
    return PBXKey(obj.get_id(), project.objects)


def root_object(project: XcodeProject) -> Any:
    return project.objects[project.rootObject]


def find_target(project: XcodeProject, name: str) -> Optional[Any]:
    for target in project.objects.get_targets():
        if getattr(target, "name", None) in (name, f'"{name}"'):
            return target
    return None


def find_application_target(project: XcodeProject) -> Optional[Any]:
    for target_id in root_object(project).targets:
        target = project.objects[target_id]
        product_type = getattr(target, "productType", None)
        if product_type is None:
            continue
        if product_type.strip('"') == ProductType.APPLICATION.value:
            return target
    return None


def find_group(project: XcodeProject, name: str) -> Optional[Any]:
    for group in project.objects.get_objects_in_section("PBXGroup"):
        if getattr(group, "name", None) == name:
            return group
    return None


def find_build_phase(project: XcodeProject, target: Any, isa: str) -> Optional[Any]:
    for phase_id in target.buildPhases:
        phase = project.objects[phase_id]
        if phase is not None and phase.isa == isa:
            return phase
    return None


def add_build_phase(
    project: XcodeProject,
    target: Any,
    phase_type: Type,
    files: Optional[List[Any]] = None,
    **fields: Any,
) -> Any:
    phase = add_object(
        project,
        phase_type,
        buildActionMask=BUILD_ACTION_MASK,
        files=[f.get_id() for f in files or []],
        runOnlyForDeploymentPostprocessing=0,
        **fields,
    )
    target.buildPhases.append(reference(project, phase))
    return phase


def info_plist_path(files: ExtensionFiles, config: Config) -> str:
    for file in files.config:
        if file.extension == ".plist":
            return f"{config.product_folder}/{file.name}"
    return f"{config.product_folder}/{config.product_folder}-Info.plist"


def target_build_settings(
    config: Config, info_plist: str
) -> Dict[str, Dict[str, Any]]:
    common = {
        BuildSettingKey.INFOPLIST_FILE.value: info_plist,
        BuildSettingKey.LD_RUNPATH_SEARCH_PATHS.value: RUNPATH_SEARCH_PATHS,
        BuildSettingKey.PRODUCT_NAME.value: config.target_name,
        BuildSettingKey.SKIP_INSTALL.value: "YES",
    }
    return {
        "Debug": {
            **common,
            BuildSettingKey.GCC_PREPROCESSOR_DEFINITIONS.value: [
                "DEBUG=1",
                "$(inherited)",
            ],
        },
        "Release": dict(common),
    }


def create_extension_target(
    project: XcodeProject, config: Config, info_plist: str
) -> Any:
    root = root_object(project)

    product = add_object(
        project,
        PBXFileReference,
        explicitFileType=FileType.APP_EXTENSION.value,
        includeInIndex=0,
        path=f"{config.target_name}.appex",
        sourceTree=SourceTree.BUILT_PRODUCTS_DIR.value,
    )
    project.objects[root.productRefGroup].children.append(reference(project, product))

    configurations = [
        add_object(project, XCBuildConfiguration, name=name, buildSettings=settings)
        for name, settings in target_build_settings(config, info_plist).items()
    ]
    configuration_list = add_object(
        project,
        XCConfigurationList,
        buildConfigurations=[c.get_id() for c in configurations],
        defaultConfigurationIsVisible=0,
        defaultConfigurationName="Release",
    )

    target = add_object(
        project,
        PBXNativeTarget,
        buildConfigurationList=configuration_list.get_id(),
        buildPhases=[],
        buildRules=[],
        dependencies=[],
        name=config.target_name,
        productName=config.target_name,
        productReference=product.get_id(),
        productType=ProductType.APP_EXTENSION.value,
    )
    root.targets.append(reference(project, target))

    application = find_application_target(project)
    if application is not None:
        embed_extension(project, application, target, product, config)
    return target


def embed_extension(
    project: XcodeProject, application: Any, target: Any, product: Any, config: Config
) -> None:
    proxy = add_object(
        project,
        PBXContainerItemProxy,
        containerPortal=project.rootObject,
        proxyType=ProxyType.TARGET_DEPENDENCY.value,
        remoteGlobalIDString=target.get_id(),
        remoteInfo=config.target_name,
    )
    dependency = add_object(
        project, PBXTargetDependency, target=target.get_id(), targetProxy=proxy.get_id()
    )
    if getattr(application, "dependencies", None) is None:
        application["dependencies"] = []
    application.dependencies.append(reference(project, dependency))

    build_file = add_object(
        project,
        PBXBuildFile,
        fileRef=product.get_id(),
        settings={"ATTRIBUTES": ["RemoveHeadersOnCopy"]},
    )
    add_build_phase(
        project,
        application,
        PBXCopyFilesBuildPhase,
        files=[build_file],
        dstPath="",
        dstSubfolderSpec=DstSubfolderSpec.PLUGINS.value,
        name="Embed App Extensions",
    )
    log(f"Embedded {config.target_name} into {application.name}")


def create_group(project: XcodeProject, config: Config) -> Any:
    group = add_object(
        project,
        PBXGroup,
        children=[],
        name=config.group_name,
        path=config.product_folder,
        sourceTree=SourceTree.GROUP.value,
    )
    parent = find_group(project, config.parent_group_name)
    if parent is not None:
        parent.children.append(reference(project, group))
    else:
        log(
            f"{config.parent_group_name} group not found, "
            f"{config.group_name} left without parent"
        )
    return group


def add_file(
    project: XcodeProject, file: ExtensionFile, group: Any, phase: Optional[Any] = None
) -> Any:
    file_ref = add_object(
        project,
        PBXFileReference,
        lastKnownFileType=FileType.from_extension(file.extension).value,
        name=file.name,
        path=file.name,
        sourceTree=SourceTree.GROUP.value,
    )
    group.children.append(reference(project, file_ref))
    if phase is not None:
        build_file = add_object(project, PBXBuildFile, fileRef=file_ref.get_id())
        phase.files.append(reference(project, build_file))
    return file_ref


def require_phase(extension: ExtensionTarget, phase: Optional[Any], isa: str) -> Any:
    # existing targets are trusted to carry their phases, they are not repaired
    if phase is None:
        raise RuntimeError(f"target {extension.target.name} has no {isa}")
    return phase


def attach_files(
    project: XcodeProject, extension: ExtensionTarget, files: ExtensionFiles
) -> None:
    # config files only live in the group, they are not part of any build phase
    for file in files.config:
        add_file(project, file, extension.group)
    for file in files.source:
        phase = require_phase(extension, extension.sources, "PBXSourcesBuildPhase")
        add_file(project, file, extension.group, phase)
    for file in files.resource:
        phase = require_phase(extension, extension.resources, "PBXResourcesBuildPhase")
        add_file(project, file, extension.group, phase)


def upsert_extension_target(
    project: XcodeProject, files: ExtensionFiles, config: Config
) -> ExtensionTarget:
    target = find_target(project, config.target_name)
    if target is not None:
        log(f"{config.target_name} target already exists")
        sources = find_build_phase(project, target, "PBXSourcesBuildPhase")
        resources = find_build_phase(project, target, "PBXResourcesBuildPhase")
        created = False
    else:
        info_plist = info_plist_path(files, config)
        target = create_extension_target(project, config, info_plist)
        # an extension builds like a separate app, so it gets phases of its own
        sources = add_build_phase(project, target, PBXSourcesBuildPhase)
        resources = add_build_phase(project, target, PBXResourcesBuildPhase)
        created = True

    group = find_group(project, config.group_name)
    if group is not None:
        log(f"{config.group_name} group already exists")
    else:
        group = create_group(project, config)

    extension = ExtensionTarget(
        target=target,
        group=group,
        sources=sources,
        resources=resources,
        created=created,
    )
    attach_files(project, extension, files)
    return extension
