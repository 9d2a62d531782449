import os
from typing import List, Optional

from pydantic import BaseModel

from build_layout import DEFAULT_BUILD_ROOT
from namespace_patcher import DEFAULT_NAMESPACE, DEFAULT_NAMESPACE_MODULE

# --- CONFIGURAÇÃO (variáveis de ambiente do CI) ---
ENV_PREFIX = "ANDROID_BUILD_"
DEFAULT_ANDROID_DIR = "android"
AUTO_NAMESPACE = "auto"


class BuildSettings(BaseModel):
    android_dir: str = DEFAULT_ANDROID_DIR
    build_root: str = DEFAULT_BUILD_ROOT
    # None = derive com.example.<module>
    default_namespace: Optional[str] = DEFAULT_NAMESPACE
    # module that owns the fixed default namespace
    default_namespace_module: str = DEFAULT_NAMESPACE_MODULE
    namespace_targets: List[str] = []

    @classmethod
    def from_env(cls, environ=None) -> "BuildSettings":
        environ = os.environ if environ is None else environ
        values = {}

        android_dir = environ.get(ENV_PREFIX + "ANDROID_DIR")
        if android_dir:
            values["android_dir"] = android_dir

        build_root = environ.get(ENV_PREFIX + "ROOT")
        if build_root:
            values["build_root"] = build_root

        default_ns = environ.get(ENV_PREFIX + "DEFAULT_NAMESPACE")
        if default_ns:
            values["default_namespace"] = None if default_ns.strip().lower() == AUTO_NAMESPACE else default_ns.strip()

        default_module = environ.get(ENV_PREFIX + "DEFAULT_NAMESPACE_MODULE")
        if default_module:
            values["default_namespace_module"] = default_module.strip()

        targets = environ.get(ENV_PREFIX + "NAMESPACE_TARGETS", "")
        values["namespace_targets"] = [t.strip() for t in targets.split(",") if t.strip()]

        return cls(**values)

    def is_target(self, module_name: str) -> bool:
        return not self.namespace_targets or module_name in self.namespace_targets
