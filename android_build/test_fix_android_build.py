from pathlib import Path

import fix_android_build
from build_errors import ConfigurationError


def test_fatal_error_exits_with_module_name(tmp_path, monkeypatch, capsys):
    def broken(project_dir, settings):
        raise ConfigurationError("isar_flutter_libs", "could not read AndroidManifest.xml")

    monkeypatch.setattr(fix_android_build, "configure_android_project", broken)
    assert fix_android_build.main([str(tmp_path)]) == 1
    assert "isar_flutter_libs" in capsys.readouterr().out


def test_runs_on_project_without_plugins(tmp_path, capsys):
    (tmp_path / "android").mkdir()
    assert fix_android_build.main([str(tmp_path)]) == 0
    assert "No module needed a namespace" in capsys.readouterr().out


def test_clean_removes_shared_build_dir(tmp_path):
    project = tmp_path / "proj"
    (project / "android").mkdir(parents=True)
    build_root = tmp_path / "build" / "app"
    build_root.mkdir(parents=True)
    assert fix_android_build.main([str(project), "clean"]) == 0
    assert not Path(tmp_path / "build").exists()


def test_clean_alone_uses_current_dir(tmp_path, monkeypatch):
    project = tmp_path / "proj"
    (project / "android").mkdir(parents=True)
    (tmp_path / "build" / "app").mkdir(parents=True)
    monkeypatch.chdir(project)
    assert fix_android_build.main(["clean"]) == 0
    assert not (tmp_path / "build").exists()
    assert not (project / "clean").exists()
