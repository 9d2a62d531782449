import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from build_errors import ConfigurationError
from module_descriptor import ModuleDescriptor

logger = logging.getLogger(__name__)

# Pasta de build compartilhada, relativa a android/ (igual ao build.gradle.kts)
DEFAULT_BUILD_ROOT = "../../build"

# Todo subprojeto é avaliado depois do :app
EVALUATION_ANCHOR = ":app"

# Repositórios de todos os projetos, na ordem de busca
REPOSITORIES = (
    ("google", "https://dl.google.com/dl/android/maven2/"),
    ("mavenCentral", "https://repo.maven.apache.org/maven2/"),
)


def repository_urls() -> List[str]:
    return [url for _, url in REPOSITORIES]


def compute_output_dir(root: Path, module_name: str) -> Path:
    """Build dir of a sub-module: the shared root plus the module name."""
    if not module_name or "/" in module_name or "\\" in module_name or module_name in (".", ".."):
        raise ConfigurationError(module_name or "<unnamed>", "invalid module name for a build directory")
    return Path(root) / module_name


def redirect_root_build_dir(android_dir: Path, relative: str = DEFAULT_BUILD_ROOT) -> Path:
    return (Path(android_dir) / relative).resolve()


def assign_build_dirs(root: Path, modules: Iterable[ModuleDescriptor]) -> List[ModuleDescriptor]:
    assigned = []
    for module in modules:
        module.build_dir = compute_output_dir(root, module.name)
        assigned.append(module)
    return assigned


def evaluation_order(modules: Iterable[ModuleDescriptor]) -> List[ModuleDescriptor]:
    """Puts the :app module first, keeps everything else in its original order."""
    anchor = EVALUATION_ANCHOR.lstrip(":")
    modules = list(modules)
    first = [m for m in modules if m.name == anchor]
    rest = [m for m in modules if m.name != anchor]
    return first + rest


def clean(build_dir: Path) -> bool:
    build_dir = Path(build_dir)
    if not build_dir.exists():
        return False
    logger.info("Removing %s", build_dir)
    shutil.rmtree(build_dir)
    return True
