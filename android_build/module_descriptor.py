from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

# Caminho padrão do manifest dentro de um módulo Android
MANIFEST_RELATIVE_PATH = Path("src") / "main" / "AndroidManifest.xml"


class ModuleDescriptor(BaseModel):
    """
    One Gradle sub-module (usually a Flutter plugin's android/ folder).
    Created once per build, patched in place, then thrown away.
    """
    name: str
    namespace: Optional[str] = None
    manifest_path: Optional[Path] = None
    project_dir: Optional[Path] = None
    build_dir: Optional[Path] = None
    capabilities: List[str] = []

    def has_namespace(self) -> bool:
        return bool(self.namespace)

    def default_manifest(self) -> Optional[Path]:
        if self.project_dir is None:
            return None
        return self.project_dir / MANIFEST_RELATIVE_PATH
