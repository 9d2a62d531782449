import logging
import sys
from pathlib import Path

from build_errors import ConfigurationError
from build_layout import clean
from build_orchestrator import configure_android_project
from build_settings import BuildSettings

# Roda DENTRO do projeto Flutter (ou recebe o caminho como argumento)
# Uso no CI: python android_build/fix_android_build.py [pasta_do_projeto] [clean]


def log_setup():
    logging.basicConfig(level=logging.INFO, format="[ANDROID-BUILD] %(message)s", stream=sys.stdout)


def main(argv=None):
    log_setup()
    argv = list(sys.argv[1:] if argv is None else argv)
    # "clean" pode vir sozinho (projeto = pasta atual) ou depois do caminho
    do_clean = bool(argv) and argv[-1] == "clean"
    if do_clean:
        argv = argv[:-1]
    project_dir = Path(argv[0]) if argv else Path.cwd()
    settings = BuildSettings.from_env()

    print(f"🔧 Configuring Android build in {project_dir}")

    if do_clean:
        build_root = (project_dir / settings.android_dir / settings.build_root).resolve()
        if clean(build_root):
            print(f"🗑️ Removed {build_root}")
        else:
            print(f"ℹ️ Nothing to clean at {build_root}")
        return 0

    try:
        report = configure_android_project(project_dir, settings)
    except ConfigurationError as e:
        print(f"❌ Build configuration failed for module '{e.module}': {e.reason}")
        return 1

    print(f"📁 Shared build dir: {report.build_root}")
    for module in report.modules:
        print(f"   -> {module.name}: namespace={module.namespace or '-'} build_dir={module.build_dir}")

    if not report.patched:
        print("ℹ️ No module needed a namespace.")
        if report.build_file_changed:
            print(f"🗑️ Removed the old namespace patch from {report.build_file}")
    elif report.build_file_changed:
        print(f"✅ Namespace patch written to {report.build_file} ({', '.join(report.patched)})")
    elif report.build_file is not None:
        print(f"ℹ️ {report.build_file} already had the namespace patch.")
    else:
        print("❌ Root build.gradle not found! Namespaces were not written.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
