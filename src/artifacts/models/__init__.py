"""Model namespace for codemap-core artifact schemas."""

from artifacts.models.nodes import (
    DirectoryNode,
    FileNode,
    SourceFile,
    SourceLocation,
    SymbolNode,
)
from artifacts.models.summary import (
    AnalysisSummary,
    ComplexityHotspot,
    InstabilityHotspot,
)

__all__ = [
    "AnalysisSummary",
    "ComplexityHotspot",
    "DirectoryNode",
    "FileNode",
    "InstabilityHotspot",
    "SourceFile",
    "SourceLocation",
    "SymbolNode",
]
