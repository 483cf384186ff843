"""Language registry: file extensions mapped to extraction rules.

Tree-based languages are parsed with tree-sitter. Every other registered
language is described purely by data: an ordered mapping from token category
to regular expressions whose first capture group is the entity name, plus the
complexity strategy used for its functions. Adding a language means adding
one entry to ``PATTERN_LANGUAGES``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from utils import file_extension

TokenCategory = Literal[
    "imports", "class", "struct", "interface", "protocol", "enum", "function"
]
ComplexityStrategy = Literal["indentation", "braces"]
Grammar = Literal["javascript", "typescript", "tsx"]


@dataclass(frozen=True)
class TreeLanguage:
    """Marker for the tree-based (AST-capable) family."""

    name: str
    grammar: Grammar


@dataclass(frozen=True)
class PatternLanguage:
    """Pattern rule set for a heuristically analyzed language.

    An entry with ``alias`` set carries no rules of its own and shares the
    rule set registered under the aliased extension.
    """

    name: str
    patterns: dict[TokenCategory, tuple[re.Pattern[str], ...]] = field(
        default_factory=dict
    )
    complexity: ComplexityStrategy | None = None
    alias: str | None = None


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(pattern, re.MULTILINE) for pattern in patterns)


# Control-flow keywords that signature patterns must not mistake for names.
_NOT_A_NAME = r"(?!(?:if|for|while|switch|catch|return|new|else|do|sizeof)\b)"

TREE_LANGUAGES: dict[str, TreeLanguage] = {
    "js": TreeLanguage("JavaScript", "javascript"),
    "jsx": TreeLanguage("JavaScript", "javascript"),
    "mjs": TreeLanguage("JavaScript", "javascript"),
    "cjs": TreeLanguage("JavaScript", "javascript"),
    "ts": TreeLanguage("TypeScript", "typescript"),
    "tsx": TreeLanguage("TypeScript", "tsx"),
}

PATTERN_LANGUAGES: dict[str, PatternLanguage] = {
    "py": PatternLanguage(
        "Python",
        {
            "imports": _compile(
                r"^[ \t]*from\s+([\w.]+)\s+import", r"^[ \t]*import\s+([\w.]+)"
            ),
            "class": _compile(r"^[ \t]*class\s+(\w+)"),
            "function": _compile(r"^[ \t]*(?:async\s+)?def\s+(\w+)"),
        },
        complexity="indentation",
    ),
    "java": PatternLanguage(
        "Java",
        {
            "imports": _compile(r"^[ \t]*import\s+(?:static\s+)?([\w.*]+);"),
            "class": _compile(
                r"^[ \t]*(?:public|private|protected)?[ \t]*(?:abstract\s+|final\s+)?class\s+(\w+)"
            ),
            "interface": _compile(
                r"^[ \t]*(?:public|private|protected)?[ \t]*interface\s+(\w+)"
            ),
            "enum": _compile(r"^[ \t]*(?:public|private|protected)?[ \t]*enum\s+(\w+)"),
            "function": _compile(
                # Modifier and type tokens stay on the signature's own line.
                r"^[ \t]*(?:[\w<>,.?\[\]]+[ \t]+)+" + _NOT_A_NAME + r"(\w+)[ \t]*\([^)]*\)"
                r"[ \t]*(?:throws[ \t]+[\w., \t]+)?\s*\{"
            ),
        },
        complexity="braces",
    ),
    "c": PatternLanguage("C", alias="cpp"),
    "h": PatternLanguage("C/C++ Header", alias="cpp"),
    "hpp": PatternLanguage("C++ Header", alias="cpp"),
    "cc": PatternLanguage("C++", alias="cpp"),
    "cpp": PatternLanguage(
        "C++",
        {
            "imports": _compile(r"^[ \t]*#include\s*[\"<]([\w./]+)[\">]"),
            "class": _compile(r"^[ \t]*(?:class|struct)\s+(\w+)"),
            "struct": _compile(r"^[ \t]*struct\s+(\w+)"),
            "function": _compile(
                r"^(?!#|using|[ \t]*\*)[ \t]*(?:[\w<>:,]+[ \t*&]+)+"
                + _NOT_A_NAME
                + r"([\w:~]+)[ \t]*\([^)]*\)[ \t]*(?:const|noexcept)?\s*\{"
            ),
        },
        complexity="braces",
    ),
    "m": PatternLanguage("Objective-C", alias="objc"),
    "mm": PatternLanguage("Objective-C++", alias="objc"),
    "objc": PatternLanguage(
        "Objective-C",
        {
            "imports": _compile(r"^[ \t]*#import\s*[\"<]([\w./]+)[\">]"),
            "class": _compile(r"^[ \t]*@interface\s+(\w+)"),
            "protocol": _compile(r"^[ \t]*@protocol\s+(\w+)"),
            "function": _compile(r"^[ \t]*[-+]\s*\([\w\s*<>,]+\)\s*(\w+)"),
        },
        complexity="braces",
    ),
    "swift": PatternLanguage(
        "Swift",
        {
            "imports": _compile(r"^[ \t]*import\s+(\w+)"),
            "class": _compile(
                r"^[ \t]*(?:public|internal|fileprivate|private|open)?[ \t]*(?:final\s+)?class\s+(\w+)"
            ),
            "struct": _compile(
                r"^[ \t]*(?:public|internal|fileprivate|private)?[ \t]*struct\s+(\w+)"
            ),
            "protocol": _compile(
                r"^[ \t]*(?:public|internal|fileprivate|private)?[ \t]*protocol\s+(\w+)"
            ),
            "enum": _compile(
                r"^[ \t]*(?:public|internal|fileprivate|private)?[ \t]*(?:indirect\s+)?enum\s+(\w+)"
            ),
            "function": _compile(
                r"^[ \t]*(?:@\w+\s+)*(?:private|public|internal|fileprivate|open)?"
                r"[ \t]*(?:static\s+|class\s+|override\s+|mutating\s+)*func\s+(\w+)"
            ),
        },
        complexity="braces",
    ),
    "kt": PatternLanguage(
        "Kotlin",
        {
            "imports": _compile(r"^[ \t]*import\s+([\w.]+)"),
            "class": _compile(
                r"^[ \t]*(?:public|internal|private)?[ \t]*(?:data|open|sealed|abstract)?[ \t]*class\s+(\w+)"
            ),
            "interface": _compile(
                r"^[ \t]*(?:public|internal|private)?[ \t]*(?:fun\s+)?interface\s+(\w+)"
            ),
            "enum": _compile(r"^[ \t]*(?:public|internal|private)?[ \t]*enum\s+class\s+(\w+)"),
            "function": _compile(
                r"^[ \t]*(?:(?:public|internal|private|protected|override|suspend|inline)\s+)*"
                r"fun\s+(?:<[^>]*>\s*)?(?:[\w.]+\.)?(\w+)"
            ),
        },
        complexity="braces",
    ),
    "go": PatternLanguage(
        "Go",
        {
            "imports": _compile(
                r"^[ \t]*import\s*\(\s*([^)]+)\s*\)", r"^[ \t]*import\s*(?:\w+\s+)?\"([^\"]+)\""
            ),
            "struct": _compile(r"^[ \t]*type\s+(\w+)\s+struct"),
            "interface": _compile(r"^[ \t]*type\s+(\w+)\s+interface"),
            "function": _compile(r"^[ \t]*func\s+(?:\([^)]*\)\s*)?(\w+)"),
        },
        complexity="braces",
    ),
    "rs": PatternLanguage(
        "Rust",
        {
            "imports": _compile(r"^[ \t]*use\s+([\w:]+)", r"^[ \t]*mod\s+([\w:]+);"),
            "struct": _compile(r"^[ \t]*(?:pub(?:\([\w:]+\))?\s+)?struct\s+(\w+)"),
            "enum": _compile(r"^[ \t]*(?:pub(?:\([\w:]+\))?\s+)?enum\s+(\w+)"),
            "interface": _compile(r"^[ \t]*(?:pub(?:\([\w:]+\))?\s+)?trait\s+(\w+)"),
            "function": _compile(
                r"^[ \t]*(?:pub(?:\([\w:]+\))?\s+)?(?:async\s+|const\s+|unsafe\s+)*fn\s+(\w+)"
            ),
        },
        complexity="braces",
    ),
}


def _resolve_alias(extension: str) -> PatternLanguage | None:
    language = PATTERN_LANGUAGES.get(extension)
    seen: set[str] = set()
    while language is not None and language.alias is not None:
        if language.alias in seen:
            return None
        seen.add(language.alias)
        language = PATTERN_LANGUAGES.get(language.alias)
    return language


def lookup_language(extension: str) -> TreeLanguage | PatternLanguage | None:
    """Return the registry entry for a normalized extension.

    Args:
        extension: Lower-case extension without the leading dot (e.g., "ts")

    Returns:
        A TreeLanguage marker, the (alias-resolved) PatternLanguage rule set,
        or None when the extension is not registered.
    """
    extension = extension.lower().lstrip(".")
    tree_language = TREE_LANGUAGES.get(extension)
    if tree_language is not None:
        return tree_language
    return _resolve_alias(extension)


def language_for_path(file_path: str) -> TreeLanguage | PatternLanguage | None:
    return lookup_language(file_extension(file_path))


def is_supported_path(file_path: str) -> bool:
    """Check whether a file would be admitted to analysis."""
    return language_for_path(file_path) is not None


def supported_extensions() -> list[str]:
    """Return every registered extension, tree-based family first."""
    return [*TREE_LANGUAGES, *PATTERN_LANGUAGES]


__all__ = [
    "PATTERN_LANGUAGES",
    "TREE_LANGUAGES",
    "ComplexityStrategy",
    "Grammar",
    "PatternLanguage",
    "TokenCategory",
    "TreeLanguage",
    "is_supported_path",
    "language_for_path",
    "lookup_language",
    "supported_extensions",
]
