"""Artifact generation entry points."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from artifacts.models.nodes import DirectoryNode, SourceFile
    from rules.config import CodeMapConfig


def analyze_project(files: Iterable[SourceFile]) -> DirectoryNode:
    """Run the analysis engine via lazy import to avoid package import cycles."""
    from artifacts.assemble import analyze_project as _analyze_project

    return _analyze_project(files)


def generate_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: CodeMapConfig | None = None,
) -> dict[str, object]:
    """Generate artifacts via lazy import to avoid package import cycles."""
    from artifacts.write import generate_artifacts as _generate_artifacts

    return _generate_artifacts(root=root, out_dir=out_dir, config=config)


__all__ = ["analyze_project", "generate_artifacts"]
