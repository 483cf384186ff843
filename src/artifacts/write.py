from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artifacts.assemble import analyze_project
from artifacts.summaries.builders import build_summary
from artifacts.utils import _get_output_dir_name, _write_json
from contract.artifacts import PROJECT_TREE_JSON, SUMMARY_JSON
from rules.config import load_config, resolve_output_dir
from scan.files import find_source_files, read_source_files

if TYPE_CHECKING:
    from pathlib import Path

    from artifacts.models.nodes import DirectoryNode, SourceFile
    from rules.config import CodeMapConfig

logger = logging.getLogger(__name__)


def collect_sources(
    root: Path,
    config: CodeMapConfig,
    out_dir: Path | None = None,
) -> list[SourceFile]:
    """Discover and read every supported source file below ``root``."""
    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)
    paths = find_source_files(
        root,
        output_dir=_get_output_dir_name(out_dir.resolve(), root.resolve()),
        include_patterns=config.include or None,
        exclude_patterns=config.exclude or None,
        nested_gitignore=config.nested_gitignore,
    )
    return read_source_files(root, paths, max_file_bytes=config.max_file_bytes)


def analyze_root(
    root: Path,
    config: CodeMapConfig | None = None,
    out_dir: Path | None = None,
) -> DirectoryNode:
    """Acquire the files below ``root`` and run the analysis engine on them."""
    if config is None:
        config = load_config(root)
    return analyze_project(collect_sources(root, config, out_dir))


def generate_artifacts(
    *,
    root: Path,
    out_dir: Path | None = None,
    config: CodeMapConfig | None = None,
) -> dict[str, object]:
    """Analyze a project and write its deterministic artifacts.

    Args:
        root: Root directory of the project to analyze
        out_dir: Optional output directory for generated artifacts
        config: Optional configuration; loaded from codemap.toml when omitted

    Returns:
        Dictionary with counts and list of generated artifact paths.
    """
    if config is None:
        config = load_config(root)

    if out_dir is None:
        out_dir = resolve_output_dir(root, config.output_dir)

    project_tree = analyze_root(root, config, out_dir)
    summary = build_summary(project_tree, top_n=config.summary_top_n)

    out_dir.mkdir(parents=True, exist_ok=True)
    _write_json(out_dir / PROJECT_TREE_JSON, project_tree)
    _write_json(out_dir / SUMMARY_JSON, summary)
    logger.debug("Wrote artifacts for %d files to %s", summary.file_count, out_dir)

    return {
        "file_count": summary.file_count,
        "symbol_count": summary.symbol_count,
        "edge_count": summary.edge_count,
        "cycle_count": len(summary.cycles),
        "unused_export_count": len(summary.unused_exports),
        "artifacts": [str(out_dir / name) for name in (PROJECT_TREE_JSON, SUMMARY_JSON)],
    }
