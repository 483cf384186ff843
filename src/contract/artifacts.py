"""Artifact contract definitions.

This module defines the stable file names and formats written by
``codemap analyze``.
"""

from __future__ import annotations

from dataclasses import dataclass

from artifacts.models.summary import SCHEMA_VERSION

# Artifact schema version, shared with AnalysisSummary.schema_version.
ARTIFACT_SCHEMA_VERSION = SCHEMA_VERSION

# Artifact filename constants (stable contract identifiers).
PROJECT_TREE_JSON = "project_tree.json"
SUMMARY_JSON = "summary.json"


@dataclass(frozen=True)
class ArtifactSpec:
    """Specification for a contract artifact."""

    filename: str
    format: str
    required_fields_note: str


ARTIFACT_SPECS: dict[str, ArtifactSpec] = {
    "project_tree": ArtifactSpec(
        filename=PROJECT_TREE_JSON,
        format="json",
        required_fields_note="DirectoryNode root with camelCase node fields.",
    ),
    "summary": ArtifactSpec(
        filename=SUMMARY_JSON,
        format="json",
        required_fields_note="AnalysisSummary fields required by contract.",
    ),
}
