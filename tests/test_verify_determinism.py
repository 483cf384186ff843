from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from artifacts.write import generate_artifacts
from verify.verify import DeterminismResult, verify_determinism

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import CodeMapConfig


def _write_minimal_project(root: Path) -> None:
    (root / "pkg").mkdir(parents=True, exist_ok=True)
    (root / "pkg" / "module.py").write_text(
        "def run():\n    if ready:\n        pass\n",
        encoding="utf-8",
    )


def test_verify_determinism_requires_artifacts_dir(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)

    missing_dir = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="Artifacts directory does not exist"):
        verify_determinism(root=project_root, artifacts_dir=missing_dir)


def test_verify_determinism_rejects_file_path(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "artifacts"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        verify_determinism(root=tmp_path, artifacts_dir=not_a_dir)


def test_verify_determinism_matches_fresh_output(tmp_path: Path) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)
    artifacts_dir = tmp_path / "artifacts"

    generate_artifacts(root=project_root, out_dir=artifacts_dir)
    result = verify_determinism(root=project_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_relative_paths_and_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    project_root = tmp_path / "project"
    project_root.mkdir()
    _write_minimal_project(project_root)

    artifacts_dir = tmp_path / "artifacts"
    artifacts_dir.mkdir()

    for rel_path, content in (
        ("c.json", "c-original"),
        ("b.json", "b-original"),
        ("a.json", "a-original"),
    ):
        path = artifacts_dir / rel_path
        path.write_text(content, encoding="utf-8")

    def _fake_generate_artifacts(
        *, root: Path, out_dir: Path, config: CodeMapConfig
    ) -> dict[str, object]:
        (out_dir / "a.json").write_text("a-original", encoding="utf-8")
        (out_dir / "b.json").write_text("b-regenerated", encoding="utf-8")
        (out_dir / "d.json").write_text("d-new", encoding="utf-8")
        return {"artifacts": [str(out_dir / name) for name in ("a.json", "b.json")]}

    monkeypatch.setattr(
        "verify.verify.generate_artifacts",
        _fake_generate_artifacts,
    )

    result = verify_determinism(root=project_root, artifacts_dir=artifacts_dir)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("b.json",),
        missing=("c.json",),
        extra=("d.json",),
    )
