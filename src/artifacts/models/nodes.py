"""Node models for the project tree.

This module contains the models for the analysis output: symbol, file and
directory nodes, plus the identifier scheme that addresses them. Attributes
are snake_case in Python and serialize with camelCase aliases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SymbolKind = Literal[
    "class",
    "function",
    "arrow_function",
    "variable",
    "struct",
    "interface",
    "protocol",
    "enum",
]

ROOT_ID = "project_root"
ROOT_NAME = "root"

_FILE_PREFIX = "file:"
_DIR_PREFIX = "dir:"


def file_id(path: str) -> str:
    return f"{_FILE_PREFIX}{path}"


def directory_id(path: str) -> str:
    return f"{_DIR_PREFIX}{path}"


def symbol_id(path: str, name: str) -> str:
    return f"{path}:{name}"


def is_file_id(unique_id: str) -> bool:
    """Return True when the identifier addresses a file node."""
    return unique_id.startswith(_FILE_PREFIX)


def file_path_of(unique_id: str) -> str:
    """Return the path addressed by a file identifier."""
    return unique_id.removeprefix(_FILE_PREFIX)


@dataclass(frozen=True)
class SourceFile:
    """One (path, content) input pair supplied by the acquisition layer."""

    path: str
    content: str


class _NodeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SourceLocation(_NodeModel):
    """A 1-based line/column span inside a source file."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int


class SymbolNode(_NodeModel):
    """A declared entity inside a file."""

    name: str
    kind: SymbolKind
    path: str
    unique_id: str
    dependencies: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)
    is_exported: bool = False
    loc: SourceLocation | None = None
    cognitive_complexity: int | None = None
    is_unused: bool | None = None


class FileNode(_NodeModel):
    """A source file admitted by the language registry."""

    name: str
    kind: Literal["file"] = "file"
    path: str
    unique_id: str
    imports: list[str] = Field(default_factory=list)
    dependencies: list[str] = Field(default_factory=list)
    dependents: list[str] = Field(default_factory=list)
    children: list[SymbolNode] = Field(default_factory=list)
    is_cyclic: bool | None = None
    instability: float | None = Field(default=None, ge=0.0, le=1.0)


class DirectoryNode(_NodeModel):
    """A purely structural path segment."""

    name: str
    kind: Literal["directory"] = "directory"
    path: str
    unique_id: str
    children: list[
        Annotated[Union[DirectoryNode, FileNode], Field(discriminator="kind")]
    ] = Field(default_factory=list)


DirectoryNode.model_rebuild()

AnyNode = Union[DirectoryNode, FileNode, SymbolNode]


__all__ = [
    "ROOT_ID",
    "ROOT_NAME",
    "AnyNode",
    "DirectoryNode",
    "FileNode",
    "SourceFile",
    "SourceLocation",
    "SymbolKind",
    "SymbolNode",
    "directory_id",
    "file_id",
    "file_path_of",
    "is_file_id",
    "symbol_id",
]
