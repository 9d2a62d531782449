import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Tuple

from build_errors import ConfigurationError
from module_descriptor import ModuleDescriptor

logger = logging.getLogger(__name__)

BEGIN_MARKER = "// >>> namespace-patch"
END_MARKER = "// <<< namespace-patch"

# Nada de aspas ou $ dentro das strings do Gradle
MODULE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")
NAMESPACE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def check_literals(module: ModuleDescriptor):
    if not MODULE_NAME_PATTERN.match(module.name):
        raise ConfigurationError(module.name, "module name cannot be written into a Gradle string")
    if not NAMESPACE_PATTERN.match(module.namespace):
        raise ConfigurationError(module.name, f"invalid namespace {module.namespace!r}")


def render_namespace_block(modules: Iterable[ModuleDescriptor], kotlin_dsl: bool = True) -> str:
    """
    Gradle block that hands the patched namespaces to the Android plugin.
    Only modules that ended up with a namespace are written.
    """
    lines = [BEGIN_MARKER, "subprojects {", "    afterEvaluate {"]
    for module in modules:
        if not module.namespace:
            continue
        check_literals(module)
        if kotlin_dsl:
            lines.append(f'        if (project.name == "{module.name}") {{')
            lines.append('            val android = project.extensions.findByName("android") as? com.android.build.gradle.LibraryExtension')
            lines.append("            if (android != null && android.namespace.isNullOrEmpty()) {")
            lines.append(f'                android.namespace = "{module.namespace}"')
        else:
            lines.append(f'        if (project.name == "{module.name}" && project.hasProperty("android")) {{')
            lines.append("            if (project.android.namespace == null) {")
            lines.append(f'                project.android.namespace = "{module.namespace}"')
        lines.append("            }")
        lines.append("        }")
    lines += ["    }", "}", END_MARKER]
    return "\n".join(lines) + "\n"


def find_block(content: str) -> Optional[Tuple[int, int]]:
    """Start/end offsets of the marked block, trailing newline included."""
    start = content.find(BEGIN_MARKER)
    end = content.find(END_MARKER)
    if start == -1 or end == -1 or end < start:
        return None
    end += len(END_MARKER)
    if content[end:end + 1] == "\n":
        end += 1
    return start, end


def inject_block(build_file: Path, block: str) -> bool:
    """Replaces the marked block in the build file, or prepends it. True if the file changed."""
    build_file = Path(build_file)
    content = build_file.read_text(encoding="utf-8")

    span = find_block(content)
    if span is not None:
        start, end = span
        new_content = content[:start] + block + content[end:]
    else:
        # Vai no TOPO para rodar antes de qualquer avaliação
        new_content = block + "\n" + content

    if new_content == content:
        logger.info("%s already patched", build_file)
        return False

    build_file.write_text(new_content, encoding="utf-8")
    logger.info("Injected namespace patch into %s", build_file)
    return True


def remove_block(build_file: Path) -> bool:
    """Drops a marked block left by an earlier run. True if the file changed."""
    build_file = Path(build_file)
    content = build_file.read_text(encoding="utf-8")

    span = find_block(content)
    if span is None:
        return False

    start, end = span
    # a linha em branco que o inject_block colocou depois do bloco
    if start == 0 and content[end:end + 1] == "\n":
        end += 1
    build_file.write_text(content[:start] + content[end:], encoding="utf-8")
    logger.info("Removed stale namespace patch from %s", build_file)
    return True
