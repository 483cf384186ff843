"""Summary models for project-level hotspots.

This module contains the models that condense an analyzed project tree into
coupling metrics, cycles, unused exports and complexity hotspots.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# Schema version constant
SCHEMA_VERSION = 1


class ComplexityHotspot(BaseModel):
    """A function ranked by cognitive complexity."""

    unique_id: str
    name: str
    path: str
    cognitive_complexity: int


class InstabilityHotspot(BaseModel):
    """A file ranked by instability."""

    path: str
    instability: float
    afferent: int
    efferent: int


class AnalysisSummary(BaseModel):
    """Summary of the analyzed project graph."""

    schema_version: int = Field(default=SCHEMA_VERSION)
    file_count: int
    symbol_count: int
    edge_count: int = Field(description="Number of file-to-file edges")
    cycles: list[list[str]] = Field(default_factory=list)
    cyclic_files: list[str] = Field(default_factory=list)
    unused_exports: list[str] = Field(default_factory=list)
    most_complex: list[ComplexityHotspot] = Field(default_factory=list)
    most_unstable: list[InstabilityHotspot] = Field(default_factory=list)
    fan_in: dict[str, int] = Field(default_factory=dict)
    fan_out: dict[str, int] = Field(default_factory=dict)
    languages: dict[str, int] = Field(default_factory=dict)


__all__ = [
    "SCHEMA_VERSION",
    "AnalysisSummary",
    "ComplexityHotspot",
    "InstabilityHotspot",
]
