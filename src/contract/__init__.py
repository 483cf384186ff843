"""Stable artifact contract surface for codemap-core.

Consumers of ``project_tree.json`` and ``summary.json`` should rely only on
these exports.
"""

from contract.artifacts import (
    ARTIFACT_SCHEMA_VERSION,
    ARTIFACT_SPECS,
    PROJECT_TREE_JSON,
    SUMMARY_JSON,
    ArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"ValidationMessage", "ValidationResult", "validate_artifacts"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_artifacts,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_artifacts": validate_artifacts,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ARTIFACT_SCHEMA_VERSION",
    "ARTIFACT_SPECS",
    "PROJECT_TREE_JSON",
    "SUMMARY_JSON",
    "ArtifactSpec",
    "ValidationMessage",
    "ValidationResult",
    "validate_artifacts",
]
