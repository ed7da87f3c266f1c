import re
import xml.etree.ElementTree as ET

from pathlib import Path
from typing import Any, Dict, Optional

from shareext.details.context import ConfigurationMissing, HookInputs


def get_preference_value(config_xml: str, name: str) -> Optional[str]:
    match = re.search(
        'name="' + re.escape(name) + '" value="(.*?)"', config_xml, re.IGNORECASE
    )
    # an empty capture is reported as missing
    if match and match.group(1):
        return match.group(1)
    return None


def plugin_variables(package_json: Dict[str, Any], plugin_id: str) -> Dict[str, Any]:
    plugins = (package_json.get("cordova") or {}).get("plugins") or {}
    variables = plugins.get(plugin_id)
    return variables if isinstance(variables, dict) else {}


def get_cordova_parameter(
    package_json: Dict[str, Any], config_xml: str, name: str, plugin_id: str
) -> Optional[str]:
    variable = plugin_variables(package_json, plugin_id).get(name)
    if not variable:
        variable = get_preference_value(config_xml, name)
    return variable


def widget_attributes(config_xml: str) -> Dict[str, str]:
    try:
        root = ET.fromstring(config_xml)
    except ET.ParseError as e:
        raise ConfigurationMissing(f"unable to parse config.xml: {e}") from e
    attributes = dict(root.attrib)
    name = root.find("{*}name")
    if name is not None and name.text:
        attributes["name"] = name.text.strip()
    return attributes


def get_preferences(
    inputs: HookInputs, project_name: str, plugin_id: str
) -> Dict[str, str]:
    """
    Build the placeholder table substituted into the extension's files.

    Every variable of the plugin block in package.json becomes ``__NAME__``,
    followed by the values derived from the manifest. Placeholders without a
    resolvable value are left out.
    """

    def parameter(name: str) -> Optional[str]:
        return get_cordova_parameter(
            inputs.package_json, inputs.config_xml, name, plugin_id
        )

    widget = widget_attributes(inputs.config_xml)
    bundle_id = widget.get("id")
    version = widget.get("version")

    preferences: Dict[str, Optional[str]] = {
        f"__{key}__": str(value)
        for key, value in plugin_variables(inputs.package_json, plugin_id).items()
        if value
    }
    preferences.update(
        {
            "__DISPLAY_NAME__": parameter("DISPLAY_NAME")
            or widget.get("name")
            or project_name,
            "__BUNDLE_IDENTIFIER__": parameter("SHARE_BUNDLE_IDENTIFIER")
            or (f"{bundle_id}.shareextension" if bundle_id else None),
            "__GROUP_IDENTIFIER__": parameter("GROUP_IDENTIFIER")
            or (f"group.{bundle_id}.shareextension" if bundle_id else None),
            "__BUNDLE_SHORT_VERSION_STRING__": version,
            "__BUNDLE_VERSION__": widget.get("ios-CFBundleVersion") or version,
            "__URL_SCHEME__": parameter("URL_SCHEME"),
        }
    )
    return {key: value for key, value in preferences.items() if value}


def replace_preferences_in_file(path: Path, preferences: Dict[str, str]) -> None:
    # newline="" keeps the file's own line endings
    with open(path, encoding="utf-8", newline="") as f:
        content = f.read()
    for placeholder, value in preferences.items():
        content = content.replace(placeholder, value)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
