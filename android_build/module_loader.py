import json
import logging
import re
from pathlib import Path
from typing import List, Optional

from module_capabilities import capabilities_from_gradle
from build_errors import ConfigurationError
from module_descriptor import ModuleDescriptor

logger = logging.getLogger(__name__)

PLUGINS_FILE = ".flutter-plugins-dependencies"
GRADLE_FILES = ("build.gradle", "build.gradle.kts")

# namespace = "x" (kts)  |  namespace "x" / namespace 'x' (groovy)
NAMESPACE_PATTERN = re.compile(r"""^\s*namespace\s*=?\s*["']([^"']+)["']""", re.MULTILINE)


def find_gradle_file(project_dir: Path) -> Optional[Path]:
    for filename in GRADLE_FILES:
        candidate = project_dir / filename
        if candidate.exists():
            return candidate
    return None


def read_declared_namespace(content: str) -> Optional[str]:
    match = NAMESPACE_PATTERN.search(content)
    if match:
        return match.group(1)
    return None


def load_module(project_dir, name: Optional[str] = None) -> ModuleDescriptor:
    """
    Describes one Gradle module from its folder.
    Flutter plugins keep the Gradle module in <plugin>/android, so in that
    case the plugin folder gives the name.
    """
    project_dir = Path(project_dir)
    if name is None:
        name = project_dir.parent.name if project_dir.name == "android" else project_dir.name

    module = ModuleDescriptor(name=name, project_dir=project_dir)
    module.manifest_path = module.default_manifest()

    gradle_file = find_gradle_file(project_dir)
    if gradle_file is not None:
        try:
            content = gradle_file.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            raise ConfigurationError(name, f"could not read {gradle_file}: {e}") from e
        module.namespace = read_declared_namespace(content)
        module.capabilities = capabilities_from_gradle(content)
    else:
        logger.warning("%s: no build.gradle in %s", name, project_dir)
    return module


def load_flutter_plugins(flutter_project_dir) -> List[ModuleDescriptor]:
    """Reads the Android plugins Flutter listed in .flutter-plugins-dependencies."""
    plugins_file = Path(flutter_project_dir) / PLUGINS_FILE
    if not plugins_file.exists():
        logger.info("%s not found (flutter pub get not run yet?)", plugins_file)
        return []

    try:
        data = json.loads(plugins_file.read_text(encoding="utf-8"))
        entries = [(e["name"], Path(e["path"])) for e in data["plugins"]["android"]]
    except (ValueError, KeyError, TypeError) as e:
        raise ConfigurationError(PLUGINS_FILE, f"malformed plugin list: {e}") from e

    modules = []
    for name, plugin_dir in entries:
        modules.append(load_module(plugin_dir / "android", name=name))
    return modules
