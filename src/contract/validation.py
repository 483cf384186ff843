"""Validation helpers for codemap-core artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ValidationError

from artifacts.index import iter_tree
from artifacts.models.nodes import DirectoryNode, FileNode, SymbolNode
from artifacts.models.summary import AnalysisSummary
from contract.artifacts import ARTIFACT_SCHEMA_VERSION, ARTIFACT_SPECS

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str

    def location(self) -> str:
        return str(self.path)

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error(self, artifact: str, path: Path, message: str) -> None:
        self.errors.append(ValidationMessage(artifact, path, message))

    def warn(self, artifact: str, path: Path, message: str) -> None:
        self.warnings.append(ValidationMessage(artifact, path, message))


_MODELS: dict[str, type[BaseModel]] = {
    "project_tree": DirectoryNode,
    "summary": AnalysisSummary,
}


def validate_artifacts(
    artifacts_dir: Path, *, strict_schema_version: bool = False
) -> ValidationResult:
    """Check that every contract artifact exists and matches its model.

    Beyond the schema, the project tree is checked for duplicate identifiers
    (errors) and for edges pointing at identifiers missing from the tree
    (warnings). A summary ``schema_version`` mismatch is a warning unless
    ``strict_schema_version`` is set.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.error(
            "artifacts_dir", artifacts_dir, "Artifacts directory does not exist."
        )
        return result
    if not artifacts_dir.is_dir():
        result.error("artifacts_dir", artifacts_dir, "Artifacts path is not a directory.")
        return result

    for artifact_name, spec in ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.error(artifact_name, path, "Required artifact file is missing.")
            continue

        model = _load_model(artifact_name, path, result)
        if isinstance(model, AnalysisSummary):
            if model.schema_version != ARTIFACT_SCHEMA_VERSION:
                report = result.error if strict_schema_version else result.warn
                report(
                    artifact_name,
                    path,
                    f"schema_version {model.schema_version} does not match "
                    f"expected {ARTIFACT_SCHEMA_VERSION}.",
                )
        elif isinstance(model, DirectoryNode):
            _check_tree_identifiers(artifact_name, path, model, result)

    return result


def _load_model(
    artifact_name: str, path: Path, result: ValidationResult
) -> BaseModel | None:
    try:
        payload = orjson.loads(path.read_bytes())
    except OSError as exc:
        result.error(artifact_name, path, f"Failed to read file: {exc}.")
        return None
    except orjson.JSONDecodeError as exc:
        result.error(artifact_name, path, f"Invalid JSON: {exc}.")
        return None

    try:
        return _MODELS[artifact_name].model_validate(payload)
    except ValidationError as exc:
        result.error(
            artifact_name,
            path,
            f"Schema validation failed: {exc.error_count()} error(s).",
        )
        return None


def _check_tree_identifiers(
    artifact_name: str,
    path: Path,
    root: DirectoryNode,
    result: ValidationResult,
) -> None:
    seen: set[str] = set()
    edges: set[str] = set()
    for node in iter_tree(root):
        if node.unique_id in seen:
            result.error(artifact_name, path, f"Duplicate identifier {node.unique_id!r}.")
        seen.add(node.unique_id)
        if isinstance(node, (FileNode, SymbolNode)):
            edges.update(node.dependencies)
            edges.update(node.dependents)

    for dangling in sorted(edges - seen):
        result.warn(artifact_name, path, f"Edge target {dangling!r} is not in the tree.")
