"""Parsing utilities for codemap-core."""

from parse.complexity import cognitive_complexity
from parse.heuristic_complexity import (
    brace_complexity,
    extract_brace_body,
    indentation_complexity,
)
from parse.pattern_symbols import extract_symbols_patterns
from parse.treesitter_symbols import (
    SourceParseError,
    extract_symbols_treesitter,
    parse_source,
)
from parse.ts_imports import extract_imports, resolve_import_path

__all__ = [
    "SourceParseError",
    "brace_complexity",
    "cognitive_complexity",
    "extract_brace_body",
    "extract_imports",
    "extract_symbols_patterns",
    "extract_symbols_treesitter",
    "indentation_complexity",
    "parse_source",
    "resolve_import_path",
]
