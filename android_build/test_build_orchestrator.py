from build_orchestrator import configure_android_project
from build_settings import BuildSettings
from gradle_patch import BEGIN_MARKER
from module_capabilities import ANDROID_APPLICATION, ANDROID_LIBRARY
from module_descriptor import ModuleDescriptor
from namespace_patcher import DEFAULT_NAMESPACE


def make_project(tmp_path, gradle_name="build.gradle.kts"):
    project = tmp_path / "medubs_native"
    android_dir = project / "android"
    android_dir.mkdir(parents=True)
    (android_dir / gradle_name).write_text("allprojects {\n}\n", encoding="utf-8")
    return project


def make_modules(tmp_path):
    manifest = tmp_path / "AndroidManifest.xml"
    manifest.write_text('<manifest package="dev.isar.isar_flutter_libs"/>', encoding="utf-8")
    return [
        ModuleDescriptor(name="isar_flutter_libs", manifest_path=manifest, capabilities=[ANDROID_LIBRARY]),
        ModuleDescriptor(name="other_lib", namespace="com.example.other", capabilities=[ANDROID_LIBRARY]),
        ModuleDescriptor(name="app", capabilities=[ANDROID_APPLICATION]),
        ModuleDescriptor(name="pure_dart"),
    ]


def test_configure_patches_and_writes_build_file(tmp_path):
    project = make_project(tmp_path)
    report = configure_android_project(project, BuildSettings(), modules=make_modules(tmp_path))

    assert report.build_root == (tmp_path / "build").resolve()
    assert [m.name for m in report.modules] == ["app", "isar_flutter_libs", "other_lib", "pure_dart"]
    assert report.patched == ["isar_flutter_libs"]
    by_name = {m.name: m for m in report.modules}
    assert by_name["isar_flutter_libs"].namespace == "dev.isar.isar_flutter_libs"
    assert by_name["other_lib"].namespace == "com.example.other"
    assert by_name["app"].namespace is None
    assert by_name["other_lib"].build_dir == report.build_root / "other_lib"

    assert report.build_file_changed
    content = report.build_file.read_text(encoding="utf-8")
    assert content.startswith(BEGIN_MARKER)
    assert 'android.namespace = "dev.isar.isar_flutter_libs"' in content


def test_second_run_leaves_build_file_alone(tmp_path):
    project = make_project(tmp_path)
    configure_android_project(project, modules=make_modules(tmp_path))
    report = configure_android_project(project, modules=make_modules(tmp_path))
    assert report.patched == ["isar_flutter_libs"]
    assert not report.build_file_changed


def test_targets_restrict_patching(tmp_path):
    project = make_project(tmp_path, gradle_name="build.gradle")
    modules = [
        ModuleDescriptor(name="isar_flutter_libs", capabilities=[ANDROID_LIBRARY]),
        ModuleDescriptor(name="camera", capabilities=[ANDROID_LIBRARY]),
    ]
    settings = BuildSettings(namespace_targets=["isar_flutter_libs"])
    report = configure_android_project(project, settings, modules=modules)
    assert report.patched == ["isar_flutter_libs"]
    assert modules[0].namespace == DEFAULT_NAMESPACE
    assert modules[1].namespace is None
    assert "project.android.namespace" in report.build_file.read_text(encoding="utf-8")


def test_nothing_to_patch_does_not_touch_file(tmp_path):
    project = make_project(tmp_path)
    modules = [ModuleDescriptor(name="other_lib", namespace="com.example.other", capabilities=[ANDROID_LIBRARY])]
    report = configure_android_project(project, modules=modules)
    assert report.patched == []
    assert not report.build_file_changed
    assert report.build_file.read_text(encoding="utf-8") == "allprojects {\n}\n"


def test_missing_root_build_file(tmp_path):
    project = tmp_path / "empty"
    modules = [ModuleDescriptor(name="lib", capabilities=[ANDROID_LIBRARY])]
    report = configure_android_project(project, modules=modules)
    assert report.patched == ["lib"]
    assert report.build_file is None
    assert modules[0].namespace == "com.example.lib"


def test_fixed_default_only_goes_to_its_own_module(tmp_path):
    project = make_project(tmp_path)
    modules = [
        ModuleDescriptor(name="camera", capabilities=[ANDROID_LIBRARY]),
        ModuleDescriptor(name="old_plugin", capabilities=[ANDROID_LIBRARY]),
        ModuleDescriptor(name="isar_flutter_libs", capabilities=[ANDROID_LIBRARY]),
    ]
    configure_android_project(project, BuildSettings(), modules=modules)
    namespaces = [m.namespace for m in modules]
    assert namespaces == ["com.example.camera", "com.example.old_plugin", DEFAULT_NAMESPACE]
    assert len(set(namespaces)) == len(namespaces)


def test_manifest_still_wins_for_other_modules(tmp_path):
    project = make_project(tmp_path)
    manifest = tmp_path / "AndroidManifest.xml"
    manifest.write_text('<manifest package="io.camera.plugin"/>', encoding="utf-8")
    module = ModuleDescriptor(name="camera", manifest_path=manifest, capabilities=[ANDROID_LIBRARY])
    configure_android_project(project, modules=[module])
    assert module.namespace == "io.camera.plugin"


def test_stale_block_removed_when_nothing_to_patch(tmp_path):
    project = make_project(tmp_path)
    configure_android_project(project, modules=make_modules(tmp_path))

    modules = [ModuleDescriptor(name="isar_flutter_libs", namespace="dev.isar.x", capabilities=[ANDROID_LIBRARY])]
    report = configure_android_project(project, modules=modules)
    assert report.patched == []
    assert report.build_file_changed
    content = report.build_file.read_text(encoding="utf-8")
    assert BEGIN_MARKER not in content
    assert content == "allprojects {\n}\n"
