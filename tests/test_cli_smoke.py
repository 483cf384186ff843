from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from cli import main
from contract.artifacts import PROJECT_TREE_JSON, SUMMARY_JSON
from rules.config import ConfigError, load_config, resolve_output_dir


def _write_minimal_project(root: Path) -> None:
    (root / "src").mkdir(parents=True, exist_ok=True)
    (root / "src" / "lib.ts").write_text(
        "export function add(a: number, b: number) { return a + b; }\n",
        encoding="utf-8",
    )
    (root / "src" / "main.ts").write_text(
        "import { add } from './lib';\nadd(1, 2);\n",
        encoding="utf-8",
    )


def _copy_mini_project_fixture(root: Path) -> None:
    fixture_project = Path(__file__).parent / "fixtures" / "mini_project"
    shutil.copytree(fixture_project, root)


def test_cli_analyze_smoke(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)

    out_dir = tmp_path / "artifacts"
    exit_code = main(["analyze", str(project_root), "--out-dir", str(out_dir)])

    assert exit_code == 0
    assert (out_dir / PROJECT_TREE_JSON).is_file()
    assert (out_dir / SUMMARY_JSON).is_file()
    assert "2 files, 1 symbols, 1 file edges, 0 cycles" in capsys.readouterr().out


def test_analyze_default_output_dir_from_fixture(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_mini_project_fixture(project_root)

    assert not (project_root / ".codemap").exists(), "output dir must not pre-exist"
    exit_code = main(["analyze", str(project_root)])

    default_out_dir = project_root / ".codemap"
    assert exit_code == 0
    assert sorted(p.name for p in default_out_dir.iterdir()) == [
        PROJECT_TREE_JSON,
        SUMMARY_JSON,
    ]


def test_analyze_warns_when_no_supported_files(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "notes.md").write_text("# notes\n", encoding="utf-8")

    exit_code = main(["analyze", str(tmp_path), "--out-dir", str(tmp_path / "out")])

    assert exit_code == 0
    assert "no supported source files" in capsys.readouterr().err


def test_cli_summary_lists_hotspots(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_root = tmp_path / "project"
    _copy_mini_project_fixture(project_root)

    exit_code = main(["summary", str(project_root), "--top", "2"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "cycles: 1" in out
    assert "web/src/cycle/p.js -> web/src/cycle/q.js" in out
    assert "web/src/cycle/r.js:r" in out
    assert "tools/x.py:g" in out
    assert "native/m.c:h" not in out


def test_cli_search_prints_kind_and_identifier(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)

    exit_code = main(["search", "ADD", "--root", str(project_root)])

    assert exit_code == 0
    assert capsys.readouterr().out == "function\tsrc/lib.ts:add\n"


def test_cli_validate_accepts_generated_artifacts(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_mini_project_fixture(project_root)

    assert main(["analyze", str(project_root)]) == 0
    assert main(["validate", str(project_root)]) == 0


def test_cli_validate_default_artifacts_dir_reports_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)
    default_artifacts_dir = (project_root / load_config(project_root).output_dir).resolve()

    monkeypatch.chdir(project_root)
    exit_code = main(["validate"])

    assert exit_code == 1
    captured = capsys.readouterr()
    assert f"{default_artifacts_dir}:" in captured.err
    assert "Artifacts directory does not exist." in captured.err


def test_cli_verify_round_trip(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    _copy_mini_project_fixture(project_root)

    assert main(["analyze", str(project_root)]) == 0
    assert main(["verify", str(project_root)]) == 0

    (project_root / "tools" / "extra.py").write_text("def z():\n    pass\n", encoding="utf-8")
    assert main(["verify", str(project_root)]) == 1


def test_cli_verify_missing_artifacts_dir_reports_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)

    artifacts_dir = tmp_path / "missing-artifacts"
    exit_code = main(["verify", str(project_root), "--artifacts-dir", str(artifacts_dir)])

    assert exit_code == 2
    captured = capsys.readouterr()
    assert f"artifacts-dir: {artifacts_dir}" in captured.err
    assert "Artifacts directory does not exist" in captured.err


def test_cli_reports_config_errors(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "codemap.toml").write_text("bogus = 1\n", encoding="utf-8")

    exit_code = main(["summary", str(tmp_path)])

    assert exit_code == 1
    assert "config error" in capsys.readouterr().err


def test_resolve_output_dir_rejects_escape(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    with pytest.raises(ConfigError, match="escapes the project root"):
        resolve_output_dir(project_root, "../outside")


@pytest.mark.parametrize("output_dir", ["", ".", "/abs/out", "~/out"])
def test_resolve_output_dir_rejects_invalid_values(
    tmp_path: Path, output_dir: str
) -> None:
    with pytest.raises(ConfigError):
        resolve_output_dir(tmp_path, output_dir)


@pytest.mark.parametrize("output_dir", [".", "src/.."])
def test_resolve_output_dir_rejects_project_root(
    tmp_path: Path, output_dir: str
) -> None:
    (tmp_path / "src").mkdir()
    with pytest.raises(ConfigError, match="project root itself"):
        resolve_output_dir(tmp_path, output_dir)
