"""Approximate cognitive complexity for pattern-analyzed languages.

Two line-oriented strategies: indentation tracking for languages whose blocks
are delimited by indentation, and brace balancing for brace-delimited ones.
"""

from __future__ import annotations

import re

_NESTING_KEYWORDS = ("if", "for", "while", "except", "with")
_BRANCH_KEYWORDS = ("elif", "else")

_INDENT_NESTING_RE = re.compile(rf"^(?:{'|'.join(_NESTING_KEYWORDS)})\b")
_INDENT_BRANCH_RE = re.compile(rf"^(?:{'|'.join(_BRANCH_KEYWORDS)})\b")
_BOOLEAN_WORD_RE = re.compile(r"\b(?:and|or)\b")

_BRACE_NESTING_RE = re.compile(r"\b(?:if|for|while|switch|catch)\b")
_BRACE_BRANCH_RE = re.compile(r"\b(?:else|case|goto)\b")
_BRACE_BOOLEAN_RE = re.compile(r"&&|\|\|")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip())


def _find_header(lines: list[str], function_name: str) -> int:
    header_re = re.compile(rf"^(?:async\s+)?def\s+{re.escape(function_name)}\s*\(")
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if trimmed.startswith("#"):
            continue
        if header_re.match(trimmed):
            return index
    return -1


def _indented_block(lines: list[str], header_index: int) -> list[str]:
    header_indent = _indent_of(lines[header_index])
    block: list[str] = []
    for line in lines[header_index + 1 :]:
        if line.strip() and _indent_of(line) <= header_indent:
            break
        block.append(line)
    return block


def indentation_complexity(content: str, function_name: str) -> int:
    """Score a function in an indentation-delimited language.

    The first non-comment definition header for ``function_name`` anchors the
    scan; its body is every following line indented deeper than the header.
    Returns 0 when no header is found.
    """
    lines = content.split("\n")
    header_index = _find_header(lines, function_name)
    if header_index == -1:
        return 0

    recursion_re = re.compile(rf"\b{re.escape(function_name)}\b")
    complexity = 0
    open_levels: list[int] = []

    for line in _indented_block(lines, header_index):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        indent = _indent_of(line)
        while open_levels and indent <= open_levels[-1]:
            open_levels.pop()

        if _INDENT_NESTING_RE.match(trimmed):
            complexity += 1 + len(open_levels)
            open_levels.append(indent)
        elif _INDENT_BRANCH_RE.match(trimmed):
            complexity += 1

        complexity += len(_BOOLEAN_WORD_RE.findall(trimmed))

        if recursion_re.search(trimmed):
            complexity += 1

    return complexity


def extract_brace_body(content: str, start_index: int) -> str | None:
    """Return the text between the first ``{`` at or after ``start_index``
    and its balanced ``}``, or None when there is no brace or it never closes.
    """
    open_index = content.find("{", start_index)
    if open_index == -1:
        return None

    depth = 1
    for index in range(open_index + 1, len(content)):
        char = content[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return content[open_index + 1 : index]
    return None


def _strip_inline_comment(line: str) -> str:
    return line.strip().split("//")[0].split("/*")[0]


def brace_complexity(body: str | None, function_name: str) -> int:
    """Score a function body in a brace-delimited language."""
    if not body:
        return 0

    recursion_re = re.compile(rf"\b{re.escape(function_name)}\s*\(")
    complexity = 0
    nesting = 0

    for line in body.split("\n"):
        if "}" in line:
            nesting = max(0, nesting - line.count("}"))

        code = _strip_inline_comment(line)
        if not code:
            continue

        if _BRACE_NESTING_RE.search(code):
            complexity += 1 + nesting
        if _BRACE_BRANCH_RE.search(code):
            complexity += 1

        complexity += code.count("?")
        complexity += len(_BRACE_BOOLEAN_RE.findall(code))

        if recursion_re.search(code):
            complexity += 1

        if "{" in line:
            nesting += line.count("{")

    return complexity


__all__ = ["brace_complexity", "extract_brace_body", "indentation_complexity"]
