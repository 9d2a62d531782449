import logging
import re
from typing import Iterable, List, Optional

from unidecode import unidecode

from build_errors import ConfigurationError
from module_descriptor import ModuleDescriptor

logger = logging.getLogger(__name__)

# Valor usado quando o manifest não existe ou não tem package="..."
# ATENÇÃO: é o package real do isar_flutter_libs, não um default genérico.
DEFAULT_NAMESPACE = "dev.isar.isar_flutter_libs"
# Único módulo que recebe esse valor fixo; os outros usam com.example.<nome>
DEFAULT_NAMESPACE_MODULE = "isar_flutter_libs"

# Prefixo do fallback por módulo (mesmo do patch Groovy antigo)
DERIVED_NAMESPACE_PREFIX = "com.example"

PACKAGE_PATTERN = re.compile(r'package="([^"]+)"')


def read_manifest_package(content: str) -> Optional[str]:
    """Returns the first package="..." value of a manifest, or None."""
    match = PACKAGE_PATTERN.search(content)
    if match:
        return match.group(1)
    return None


def derive_namespace(module_name: str) -> str:
    """
    Builds com.example.<name> from a module name.
    Accents are transliterated and anything that is not a valid
    Java identifier character becomes '_'.
    """
    segment = unidecode(module_name).lower()
    segment = re.sub(r"[^a-z0-9_]", "_", segment)
    if not segment or segment[0].isdigit():
        segment = "_" + segment
    return f"{DERIVED_NAMESPACE_PREFIX}.{segment}"


class NamespacePatcher:
    def __init__(self, default_namespace: Optional[str] = DEFAULT_NAMESPACE):
        # None = derive com.example.<module> per module
        self.default_namespace = default_namespace

    def fallback_for(self, module: ModuleDescriptor) -> str:
        if self.default_namespace:
            return self.default_namespace
        return derive_namespace(module.name)

    def patch(self, module: ModuleDescriptor) -> ModuleDescriptor:
        if module.has_namespace():
            return module

        manifest = module.manifest_path
        if manifest is None or not manifest.exists():
            module.namespace = self.fallback_for(module)
            logger.debug("%s: no manifest, using %s", module.name, module.namespace)
            return module

        try:
            content = manifest.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(module.name, f"could not read {manifest}: {e}") from e

        package = read_manifest_package(content)
        if package:
            module.namespace = package
            logger.debug("%s: namespace %s from manifest", module.name, package)
        else:
            module.namespace = self.fallback_for(module)
            logger.debug("%s: manifest has no package, using %s", module.name, module.namespace)
        return module

    def patch_all(self, modules: Iterable[ModuleDescriptor]) -> List[ModuleDescriptor]:
        return [self.patch(m) for m in modules]
