import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from build_layout import assign_build_dirs, evaluation_order, redirect_root_build_dir
from module_capabilities import ANDROID_LIBRARY, android_capability
from gradle_patch import inject_block, remove_block, render_namespace_block
from module_descriptor import ModuleDescriptor
from module_loader import GRADLE_FILES, find_gradle_file, load_flutter_plugins
from namespace_patcher import NamespacePatcher
from build_settings import BuildSettings

logger = logging.getLogger(__name__)


class BuildReport(BaseModel):
    build_root: Path
    modules: List[ModuleDescriptor]
    patched: List[str] = []
    build_file: Optional[Path] = None
    build_file_changed: bool = False


def needs_namespace(module: ModuleDescriptor, settings: BuildSettings) -> bool:
    if android_capability(module) != ANDROID_LIBRARY:
        return False
    return settings.is_target(module.name) and not module.has_namespace()


def configure_android_project(flutter_dir, settings: Optional[BuildSettings] = None,
                              modules: Optional[List[ModuleDescriptor]] = None) -> BuildReport:
    """
    Runs the whole android/ configuration step:
    build dirs, namespace patch and the root Gradle file injection.
    """
    settings = settings or BuildSettings()
    flutter_dir = Path(flutter_dir)
    android_dir = flutter_dir / settings.android_dir

    if modules is None:
        modules = load_flutter_plugins(flutter_dir)
    modules = evaluation_order(modules)

    build_root = redirect_root_build_dir(android_dir, settings.build_root)
    assign_build_dirs(build_root, modules)

    fixed_patcher = NamespacePatcher(settings.default_namespace)
    derived_patcher = NamespacePatcher(None)
    to_patch = [m for m in modules if needs_namespace(m, settings)]
    for module in to_patch:
        # O namespace fixo só vale para o seu módulo, senão dois plugins colidem
        if module.name == settings.default_namespace_module:
            fixed_patcher.patch(module)
        else:
            derived_patcher.patch(module)
        logger.info("Fixing missing namespace for %s -> %s", module.name, module.namespace)

    report = BuildReport(build_root=build_root, modules=modules, patched=[m.name for m in to_patch])

    build_file = find_gradle_file(android_dir)
    if build_file is None:
        logger.warning("No %s in %s, namespaces not written", " / ".join(GRADLE_FILES), android_dir)
        return report

    report.build_file = build_file
    if to_patch:
        block = render_namespace_block(to_patch, kotlin_dsl=build_file.suffix == ".kts")
        report.build_file_changed = inject_block(build_file, block)
    else:
        report.build_file_changed = remove_block(build_file)
    return report
